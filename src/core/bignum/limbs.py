"""
Limb Store — владеющий буфер 32-битных limbs

Модуль содержит представление модуля числа в системе счисления 2^32:
- Константы ширины limb и двойной ширины (для произведений limbs)
- LimbStore: растущий буфер фиксированной ширины с проверкой индексов
- mul_limb_wide: произведение двух limbs с явным расширением до 64 бит

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждое значение в буфере лежит в [0, 2^32)
2. Каждая запись проверяет индекс против текущей ёмкости
3. Ёмкость не уменьшается автоматически, только при release()
4. Ошибка выделения не изменяет содержимое буфера
"""

import logging
from array import array
from typing import Final, List, Optional, Sequence

from src.core.bignum.config import DEFAULT_CONFIG, BigIntConfig
from src.core.bignum.errors import AllocationFailure, InvalidFormat, InvalidIndex, NullInput

logger = logging.getLogger(__name__)


# =============================================================================
# ШИРИНА LIMB
# =============================================================================

LIMB_BITS: Final[int] = 32
LIMB_BASE: Final[int] = 1 << LIMB_BITS
LIMB_MASK: Final[int] = LIMB_BASE - 1
LIMB_BYTES: Final[int] = LIMB_BITS // 8

# Произведение двух limbs плюс перенос требует ровно двойной ширины:
# (B - 1)^2 + 2 * (B - 1) = B^2 - 1
WIDE_BITS: Final[int] = 2 * LIMB_BITS
WIDE_MASK: Final[int] = (1 << WIDE_BITS) - 1

# Typecode array для беззнакового 32-битного слова
_TYPECODE: Final[str] = "I" if array("I").itemsize == LIMB_BYTES else "L"


def mul_limb_wide(x: int, y: int) -> tuple[int, int]:
    """
    Произведение двух limbs в двойной ширине.

    Args:
        x: limb в [0, 2^32)
        y: limb в [0, 2^32)

    Returns:
        (hi, lo): старшие и младшие 32 бита 64-битного произведения

    Examples:
        >>> mul_limb_wide(0xFFFFFFFF, 0xFFFFFFFF)
        (4294967294, 1)
    """
    product = x * y
    if product > WIDE_MASK:
        raise InvalidFormat(f"Limb product exceeds {WIDE_BITS} bits: {x} * {y}")
    return product >> LIMB_BITS, product & LIMB_MASK


# =============================================================================
# LIMB STORE
# =============================================================================


class LimbStore:
    """
    Растущий буфер limbs (младший limb по индексу 0).

    Рост по политике BigIntConfig (умножение на growth_factor), никогда не
    сжимается. После release() любое обращение к буферу вызывает NullInput.
    """

    def __init__(self, capacity: int = 0, config: Optional[BigIntConfig] = None):
        """
        Args:
            capacity: запрошенная ёмкость (ниже min_capacity поднимается до неё)
            config: параметры ёмкости (default: DEFAULT_CONFIG)

        Raises:
            AllocationFailure: если ёмкость превышает max_capacity или память
                не выделена
        """
        self.config = config or DEFAULT_CONFIG
        clamped = self.config.clamp_capacity(capacity)
        if clamped != capacity:
            logger.debug("Capacity %s clamped to minimum %s", capacity, clamped)
        self._check_limit(clamped)
        self._data: Optional[array] = self._allocate(clamped)

    # -------------------------------------------------------------------------
    # Выделение
    # -------------------------------------------------------------------------

    def _check_limit(self, capacity: int) -> None:
        limit = self.config.max_capacity
        if limit is not None and capacity > limit:
            logger.warning("Limb store request %s exceeds max_capacity %s", capacity, limit)
            raise AllocationFailure(
                f"Cannot allocate {capacity} limbs: max_capacity is {limit}"
            )

    @staticmethod
    def _allocate(count: int) -> array:
        try:
            return array(_TYPECODE, bytes(count * array(_TYPECODE).itemsize))
        except (MemoryError, OverflowError) as exc:
            logger.warning("Limb store allocation of %s limbs failed", count)
            raise AllocationFailure(f"Cannot allocate {count} limbs") from exc

    def _buffer(self) -> array:
        if self._data is None:
            raise NullInput("Limb store has been released")
        return self._data

    # -------------------------------------------------------------------------
    # Состояние
    # -------------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        """Количество выделенных слотов (0 после release)."""
        return 0 if self._data is None else len(self._data)

    @property
    def released(self) -> bool:
        return self._data is None

    def release(self) -> None:
        """Освобождает буфер. Повторный вызов безопасен."""
        self._data = None

    # -------------------------------------------------------------------------
    # Рост
    # -------------------------------------------------------------------------

    def ensure_capacity(self, required: int) -> None:
        """
        Гарантирует ёмкость >= required.

        Ёмкость растёт умножением на growth_factor; если итог выходит за
        max_capacity, но required в неё помещается, используется max_capacity.

        Raises:
            AllocationFailure: required > max_capacity или нехватка памяти.
                Буфер при этом не изменяется.
        """
        data = self._buffer()
        current = len(data)
        if required <= current:
            return

        new_capacity = self.config.grown_capacity(current, required)
        limit = self.config.max_capacity
        if limit is not None and new_capacity > limit:
            new_capacity = max(required, limit)
        self._check_limit(new_capacity)

        extension = self._allocate(new_capacity - current)
        try:
            data.extend(extension)
        except MemoryError as exc:
            logger.warning("Limb store growth to %s limbs failed", new_capacity)
            raise AllocationFailure(f"Cannot grow to {new_capacity} limbs") from exc
        logger.debug("Limb store grown from %s to %s limbs", current, new_capacity)

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    def _check_index(self, index: int, capacity: int) -> None:
        if not 0 <= index < capacity:
            raise InvalidIndex(f"Limb index {index} outside capacity {capacity}")

    def __getitem__(self, index: int) -> int:
        data = self._buffer()
        self._check_index(index, len(data))
        return data[index]

    def __setitem__(self, index: int, value: int) -> None:
        data = self._buffer()
        self._check_index(index, len(data))
        data[index] = _checked_limb(value)

    def read(self, count: int) -> List[int]:
        """Первые count limbs как список (младший первым)."""
        data = self._buffer()
        if not 0 <= count <= len(data):
            raise InvalidIndex(f"Cannot read {count} limbs from capacity {len(data)}")
        return data[:count].tolist()

    def write(self, limbs: Sequence[int]) -> None:
        """
        Записывает limbs начиная с индекса 0, расширяя буфер при необходимости.

        Значения проверяются до выделения памяти и до записи: при ошибке
        буфер остаётся прежним.
        """
        values = [_checked_limb(limb) for limb in limbs]
        if not values:
            return
        self.ensure_capacity(len(values))
        data = self._buffer()
        self._check_index(len(values) - 1, len(data))
        data[: len(values)] = array(_TYPECODE, values)


def _checked_limb(value: int) -> int:
    if not 0 <= value <= LIMB_MASK:
        raise InvalidFormat(f"Limb value {value} outside [0, {LIMB_MASK}]")
    return value
