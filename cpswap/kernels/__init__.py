"""
Kernel layer.

`cpswap/kernels/python/` holds the fixed-width arithmetic primitives that the
fee and curve modules build on.
"""
