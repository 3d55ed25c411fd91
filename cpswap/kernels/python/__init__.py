"""
Production Python kernels.

These modules are designed to be:
- deterministic (integer-only, bounded to the u128 domain),
- easy to audit (one checked step per line),
- small surface-area (pure functions, typed failures).
"""
