"""
JSON Schema Contract Validators

Проверка внешнего (JSON) представления снапшота BigInt до построения
BigIntSnapshot. Схема задаёт форму данных: типы полей, знак, диапазон limbs.
Канонические инварианты (size == len(limbs), старший limb ненулевой,
ноль со знаком +1) остаются за моделью BigIntSnapshot.

Схемы (src/core/contracts/schema/):
- bigint_snapshot.json: снапшот BigInt (limbs/size/capacity/sign)
"""

import json
from pathlib import Path
from typing import Any, Dict, Final, List, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match

SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"
SNAPSHOT_SCHEMA: Final[str] = "bigint_snapshot"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Загрузчик схем контрактов с кэшем по имени схемы."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self.schema_dir = schema_dir or SCHEMA_DIR
        if not self.schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self.schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, name: str) -> Dict[str, Any]:
        """
        Схема <name>.json, прошедшая meta-validation Draft 2020-12.

        Raises:
            FileNotFoundError: файла схемы нет
            ValueError: файл не является валидной JSON Schema
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        path = self.schema_dir / f"{name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")
        schema = json.loads(path.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

        self._cache[name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# SNAPSHOT CONTRACT
# =============================================================================


def _error_path(error: ValidationError) -> str:
    return "/".join(str(part) for part in error.absolute_path) or "<root>"


class SnapshotContract:
    """Контракт JSON-представления BigIntSnapshot."""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        self.schema = (loader or _SCHEMA_LOADER).load_schema(SNAPSHOT_SCHEMA)
        self._validator = Draft202012Validator(self.schema)

    def is_valid(self, data: Any) -> bool:
        return self._validator.is_valid(data)

    def errors(self, data: Any) -> List[str]:
        """
        Все нарушения контракта в виде "path: message", по порядку путей.

        Examples:
            >>> SnapshotContract().errors({"sign": 1, "size": 1, "capacity": 2, "limbs": [-1]})
            ['limbs/0: -1 is less than the minimum of 0']
        """
        found = sorted(
            self._validator.iter_errors(data),
            key=lambda e: [str(part) for part in e.absolute_path],
        )
        return [f"{_error_path(e)}: {e.message}" for e in found]

    def validate(self, data: Any) -> None:
        """
        Raises:
            ValidationError: наиболее релевантное нарушение контракта
        """
        error = best_match(self._validator.iter_errors(data))
        if error is not None:
            raise error


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_bigint_snapshot(data: Any) -> None:
    """
    Валидация JSON-представления снапшота (например, BigIntSnapshot.model_dump()).

    Raises:
        ValidationError: данные не соответствуют схеме
    """
    SnapshotContract().validate(data)
