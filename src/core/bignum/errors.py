"""
Errors — статусы и исключения bignum ядра

Каждая ошибка ядра является исключением, унаследованным от BigIntError и от
соответствующего встроенного типа (ValueError, IndexError, MemoryError,
TypeError), чтобы вызывающий код мог ловить как доменный, так и
стандартный тип.

Каждое исключение несёт атрибут ``status`` (Status) для диагностики.
"""

from enum import IntEnum
from typing import Any


# =============================================================================
# STATUS CODES
# =============================================================================


class Status(IntEnum):
    """Коды статусов операций над BigInt."""

    SUCCESS = 1
    ERR_NULL_PTR = -1
    ERR_MALLOC = -2
    ERR_REALLOC = -3
    ERR_INVALID_CAPACITY = -4
    ERR_INVALID_SIZE = -5
    ERR_INVALID_CHAR = -7
    ERR_INVALID_INDEX = -8
    ERR_UNDERFLOW = -10


_STATUS_TEXT = {
    Status.SUCCESS: "Success",
    Status.ERR_NULL_PTR: "Null input",
    Status.ERR_MALLOC: "Allocation failed",
    Status.ERR_REALLOC: "Reallocation failed",
    Status.ERR_INVALID_CAPACITY: "Invalid capacity",
    Status.ERR_INVALID_SIZE: "Invalid size",
    Status.ERR_INVALID_CHAR: "Invalid character",
    Status.ERR_INVALID_INDEX: "Invalid index",
    Status.ERR_UNDERFLOW: "Magnitude underflow",
}


def status_to_str(status: Status) -> str:
    """
    Текстовое представление статуса.

    Examples:
        >>> status_to_str(Status.ERR_INVALID_CHAR)
        'Invalid character'
    """
    return _STATUS_TEXT[Status(status)]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class BigIntError(Exception):
    """Базовое исключение bignum ядра."""

    status: Status = Status.SUCCESS


class AllocationFailure(BigIntError, MemoryError):
    """
    Буфер limbs не может быть выделен или расширен.

    Цель операции остаётся в предыдущем валидном нормализованном состоянии.
    """

    status = Status.ERR_MALLOC


class InvalidSize(BigIntError, ValueError):
    """Размер вне допустимого диапазона [1, capacity]."""

    status = Status.ERR_INVALID_SIZE


class InvalidIndex(BigIntError, IndexError):
    """Запись limb за пределами выделенной ёмкости."""

    status = Status.ERR_INVALID_INDEX


class InvalidFormat(BigIntError, ValueError):
    """Невалидный текст/значение на входе (десятичная строка, u64, snapshot)."""

    status = Status.ERR_INVALID_CHAR


class NullInput(BigIntError, TypeError):
    """Обязательный аргумент отсутствует (None или освобождённый BigInt)."""

    status = Status.ERR_NULL_PTR


class MagnitudeUnderflow(BigIntError, ValueError):
    """Нарушено предусловие |a| >= |b| при вычитании модулей."""

    status = Status.ERR_UNDERFLOW


# =============================================================================
# ПРОВЕРКА АРГУМЕНТОВ
# =============================================================================


def require_present(value: Any, name: str) -> None:
    """
    Проверка, что обязательный аргумент задан и не освобождён.

    Raises:
        NullInput: value is None или value.is_freed
    """
    if value is None:
        raise NullInput(f"Required argument '{name}' is None")
    if getattr(value, "is_freed", False):
        raise NullInput(f"Required argument '{name}' has been freed")
