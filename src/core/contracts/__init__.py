"""
Contract Validation Module

Модуль для валидации JSON контрактов bignum ядра.
"""

from .validators import (
    SCHEMA_DIR,
    SNAPSHOT_SCHEMA,
    SchemaLoader,
    SnapshotContract,
    validate_bigint_snapshot,
)

__all__ = [
    # Constants
    "SCHEMA_DIR",
    "SNAPSHOT_SCHEMA",
    # Classes
    "SchemaLoader",
    "SnapshotContract",
    # Functions
    "validate_bigint_snapshot",
]
