"""
Domain models and value objects.

Contains value models exchanged with consumers of the bignum core.
"""

from src.core.domain.snapshot import LIMB_MAX, BigIntSnapshot

__all__ = [
    # Snapshot model
    "BigIntSnapshot",
    "LIMB_MAX",
]
