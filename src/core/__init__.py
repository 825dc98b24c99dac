"""
Core numeric primitives, domain models, and invariants.

This module contains the foundational building blocks that are independent
of external systems: the arbitrary-precision integer engine, its snapshot
model and the JSON contracts that describe it.
"""
