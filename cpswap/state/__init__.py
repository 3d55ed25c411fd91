"""
Pool state snapshots for cpswap
"""

from .pools import LOCK_LP_AMOUNT, PoolState, initialize_pool

__all__ = [
    "LOCK_LP_AMOUNT",
    "PoolState",
    "initialize_pool",
]
