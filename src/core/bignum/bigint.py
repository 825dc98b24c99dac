"""
BigInt — знаковое целое произвольной точности

Публичный тип, собирающий limb store, нормализацию, сравнение, арифметику
и конверсию в одно значение с явным жизненным циклом:

    x = BigInt.init(4)            # ноль, ёмкость >= 4
    x.set_str("-123456789012345678901234567890")
    y = BigInt.from_int(42)
    out = BigInt.init()
    add(x, y, out)                # out изменяется in place
    x.free()                      # идемпотентно

Операторы (+, -, *, сравнения) создают новый BigInt на каждый результат.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Нет старшего нулевого limb, кроме канонического нуля (size=1, sign=+1)
2. 1 <= size <= capacity для живого значения; после free() size = capacity = 0
3. Копирование всегда глубокое; операции не освобождают входы
4. Ошибка выделения оставляет цель в прежнем валидном состоянии
"""

import logging
from functools import total_ordering
from typing import Any, Final, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from src.core.bignum import arithmetic, comparator, conversion
from src.core.bignum.comparator import Comparison
from src.core.bignum.config import DEFAULT_CONFIG, BigIntConfig
from src.core.bignum.errors import InvalidFormat, InvalidSize, NullInput, require_present
from src.core.bignum.limbs import LIMB_BITS, LIMB_BYTES, LIMB_MASK, LimbStore
from src.core.bignum.normalizer import normalize, trim_limbs
from src.core.contracts.validators import SnapshotContract
from src.core.domain.snapshot import BigIntSnapshot

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Верхняя граница модуля для set_int (u64)
U64_LIMIT: Final[int] = 1 << 64

# Фиксированный заголовок: size (u32) + capacity (u32) + sign (i32) + ссылка на буфер
BIGINT_HEADER_BYTES: Final[int] = 4 + 4 + 4 + 8


# =============================================================================
# BIGINT
# =============================================================================


@total_ordering
class BigInt:
    """
    Знаковое целое произвольной точности в системе счисления 2^32.

    Значение = sign * sum(limb[i] * 2^(32*i)) для i < size.
    """

    def __init__(self, capacity: int = 0, config: Optional[BigIntConfig] = None):
        """
        Args:
            capacity: начальная ёмкость в limbs (ниже минимума поднимается)
            config: параметры ёмкости (default: DEFAULT_CONFIG)

        Raises:
            AllocationFailure: буфер не может быть выделен
        """
        self._store: Optional[LimbStore] = LimbStore(capacity, config or DEFAULT_CONFIG)
        self._size = 1
        self._sign = 1

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def init(cls, capacity: int = 0, config: Optional[BigIntConfig] = None) -> "BigInt":
        """Новый BigInt со значением 0 и ёмкостью max(capacity, min_capacity)."""
        return cls(capacity, config)

    @classmethod
    def from_int(cls, value: int, config: Optional[BigIntConfig] = None) -> "BigInt":
        """
        BigInt из Python int произвольной величины.

        Examples:
            >>> str(BigInt.from_int(-(2**70)))
            '-1180591620717411303424'
        """
        if not isinstance(value, int):
            raise InvalidFormat(f"Expected int, got {type(value).__name__}")
        limbs = _split_limbs(abs(value))
        result = cls(len(limbs), config)
        return result.assign(limbs, -1 if value < 0 else 1)

    @classmethod
    def from_str(cls, text: str, config: Optional[BigIntConfig] = None) -> "BigInt":
        """BigInt из десятичной строки (см. set_str)."""
        sign, limbs = conversion.parse_decimal(text)
        result = cls(len(limbs), config)
        return result.assign(limbs, sign)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Union[BigIntSnapshot, Mapping[str, Any]],
        config: Optional[BigIntConfig] = None,
    ) -> "BigInt":
        """
        BigInt с ёмкостью и значением из снапшота.

        Args:
            snapshot: BigIntSnapshot или его JSON-представление (dict);
                dict проверяется контрактом bigint_snapshot и моделью

        Raises:
            InvalidFormat: dict нарушает контракт или каноническую форму
        """
        require_present(snapshot, "snapshot")
        if not isinstance(snapshot, BigIntSnapshot):
            snapshot = _snapshot_from_data(snapshot)
        result = cls(snapshot.capacity, config)
        return result.assign(list(snapshot.limbs), snapshot.sign)

    # -------------------------------------------------------------------------
    # Состояние
    # -------------------------------------------------------------------------

    def _live_store(self) -> LimbStore:
        if self._store is None:
            raise NullInput("BigInt has been freed")
        return self._store

    @property
    def is_freed(self) -> bool:
        return self._store is None

    @property
    def config(self) -> BigIntConfig:
        return self._live_store().config

    @property
    def capacity(self) -> int:
        return 0 if self._store is None else self._store.capacity

    @property
    def size(self) -> int:
        """Количество активных limbs."""
        return 0 if self._store is None else self._size

    @size.setter
    def size(self, value: int) -> None:
        store = self._live_store()
        if not 1 <= value <= store.capacity:
            raise InvalidSize(f"Size {value} outside [1, {store.capacity}]")
        self._size = value

    @property
    def sign(self) -> int:
        return self._sign

    @sign.setter
    def sign(self, value: int) -> None:
        if value not in (1, -1):
            raise InvalidFormat(f"Sign must be +1 or -1, got {value}")
        self._sign = value

    def limb(self, index: int) -> int:
        """Limb по индексу (в пределах ёмкости)."""
        return self._live_store()[index]

    def limbs(self) -> List[int]:
        """Копия активных limbs (младший первым)."""
        return self._live_store().read(self._size)

    def is_zero(self) -> bool:
        return self._size == 1 and self.limb(0) == 0

    # -------------------------------------------------------------------------
    # Мутация
    # -------------------------------------------------------------------------

    def assign(self, limbs: Sequence[int], sign: int) -> "BigInt":
        """
        Записывает модуль и знак, затем нормализует.

        Ёмкость растёт при необходимости и никогда не уменьшается.
        При ошибке (невалидный limb/знак, AllocationFailure) значение не
        изменяется.
        """
        store = self._live_store()
        if sign not in (1, -1):
            raise InvalidFormat(f"Sign must be +1 or -1, got {sign}")
        values = list(limbs) or [0]
        store.write(values)
        self._size = len(values)
        self._sign = sign
        return normalize(self)

    def normalize(self) -> "BigInt":
        return normalize(self)

    def free(self) -> None:
        """Освобождает буфер limbs. Повторный вызов безопасен."""
        if self._store is not None:
            self._store.release()
            logger.debug("BigInt freed")
        self._store = None
        self._size = 0
        self._sign = 1

    def set_int(self, magnitude: int, sign: int = 1) -> "BigInt":
        """
        Устанавливает значение sign * magnitude (magnitude в диапазоне u64).

        Знак передаётся отдельно, чтобы весь диапазон u64 был представим.
        Любой положительный sign → +1, иначе -1.

        Raises:
            InvalidFormat: magnitude вне [0, 2^64)
        """
        self._live_store()
        if not isinstance(magnitude, int) or not 0 <= magnitude < U64_LIMIT:
            raise InvalidFormat(f"Magnitude {magnitude!r} outside u64 range")
        limbs = [magnitude & LIMB_MASK, magnitude >> LIMB_BITS]
        return self.assign(trim_limbs(limbs), 1 if sign > 0 else -1)

    def set_str(self, text: str) -> "BigInt":
        """
        Устанавливает значение из десятичной строки.

        Знак входит в строку: "-20"; без знака число положительное.

        Raises:
            InvalidFormat: пустая строка, знак без цифр, не-цифры
        """
        return conversion.set_from_string(text, self)

    def set(self, src: "BigInt") -> "BigInt":
        """Глубокое копирование src в self (ёмкость только растёт)."""
        require_present(src, "src")
        if src is self:
            return self
        return self.assign(src.limbs(), src.sign)

    def copy(self) -> "BigInt":
        """Новый BigInt с глубокой копией значения и той же ёмкостью."""
        result = BigInt(self.capacity, self.config)
        return result.set(self)

    # -------------------------------------------------------------------------
    # Конверсия
    # -------------------------------------------------------------------------

    def to_decimal_string(self) -> str:
        return conversion.to_decimal_string(self)

    def to_binary_string(self, strip_leading_zeros: bool = False) -> str:
        """Сырой дамп битов limbs (см. conversion.to_binary_string)."""
        return conversion.to_binary_string(self, strip_leading_zeros)

    def to_int(self) -> int:
        """Значение как Python int."""
        magnitude = 0
        for limb in reversed(self.limbs()):
            magnitude = (magnitude << LIMB_BITS) | limb
        return self._sign * magnitude

    def to_snapshot(self) -> BigIntSnapshot:
        """Снапшот текущего состояния (limbs/size/capacity/sign)."""
        return BigIntSnapshot(
            sign=self.sign, size=self.size, capacity=self.capacity, limbs=self.limbs()
        )

    def footprint_bytes(self) -> int:
        """
        Занимаемая память: фиксированный заголовок + выделенные limbs.

        Для освобождённого значения учитывается только заголовок.
        """
        return BIGINT_HEADER_BYTES + LIMB_BYTES * self.capacity

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare(self, other: "BigInt") -> Comparison:
        return comparator.compare(self, other)

    def compare_int(self, magnitude: int, sign: int = 1) -> Comparison:
        return compare_int(self, magnitude, sign)

    def compare_str(self, text: str) -> Comparison:
        return compare_str(self, text)

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def _coerce(self, other: object) -> Optional["BigInt"]:
        # Операнд сравнения/арифметики не наследует max_capacity self
        if isinstance(other, BigInt):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return BigInt.from_int(other)
        return None

    def __eq__(self, other: object) -> bool:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return comparator.eq(self, operand)

    def __lt__(self, other: object) -> bool:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return comparator.compare(self, operand) is Comparison.LOWER

    def __add__(self, other: object) -> "BigInt":
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return arithmetic.add(self, operand, BigInt(0, self.config))

    __radd__ = __add__

    def __sub__(self, other: object) -> "BigInt":
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return arithmetic.subtract(self, operand, BigInt(0, self.config))

    def __rsub__(self, other: object) -> "BigInt":
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return arithmetic.subtract(operand, self, BigInt(0, self.config))

    def __mul__(self, other: object) -> "BigInt":
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return arithmetic.multiply(self, operand, BigInt(0, self.config))

    __rmul__ = __mul__

    def __neg__(self) -> "BigInt":
        return arithmetic.negate(self, BigInt(0, self.config))

    def __abs__(self) -> "BigInt":
        return BigInt(0, self.config).assign(self.limbs(), 1)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __str__(self) -> str:
        return self.to_decimal_string()

    def __repr__(self) -> str:
        if self.is_freed:
            return "BigInt(<freed>)"
        return f"BigInt('{self.to_decimal_string()}', size={self._size}, capacity={self.capacity})"


# =============================================================================
# HELPERS
# =============================================================================


def _split_limbs(magnitude: int) -> List[int]:
    limbs: List[int] = []
    while magnitude:
        limbs.append(magnitude & LIMB_MASK)
        magnitude >>= LIMB_BITS
    return limbs or [0]


def _snapshot_from_data(data: Mapping[str, Any]) -> BigIntSnapshot:
    problems = SnapshotContract().errors(data)
    if problems:
        raise InvalidFormat("Snapshot violates contract: " + "; ".join(problems))
    try:
        return BigIntSnapshot.model_validate(dict(data))
    except ValidationError as exc:
        reason = exc.errors()[0]["msg"]
        raise InvalidFormat(f"Non-canonical snapshot: {reason}") from exc


def copy_into(src: BigInt, dst: BigInt) -> BigInt:
    """dst = глубокая копия src."""
    require_present(dst, "dst")
    return dst.set(src)


# =============================================================================
# СРАВНЕНИЕ С U64 И СТРОКОЙ
# =============================================================================


def compare_int(x: BigInt, magnitude: int, sign: int = 1) -> Comparison:
    """
    Сравнение x с sign * magnitude (magnitude в диапазоне u64).

    Строит временный BigInt с DEFAULT_CONFIG (max_capacity x на сравнение
    не влияет) и делегирует в comparator.compare.
    """
    require_present(x, "x")
    other = BigInt()
    try:
        other.set_int(magnitude, sign)
        return comparator.compare(x, other)
    finally:
        other.free()


def eq_int(x: BigInt, magnitude: int, sign: int = 1) -> bool:
    return compare_int(x, magnitude, sign) is Comparison.EQUAL


def compare_str(x: BigInt, text: str) -> Comparison:
    """
    Сравнение x со значением десятичной строки.

    Raises:
        InvalidFormat: text не является десятичной строкой
    """
    require_present(x, "x")
    other = BigInt()
    try:
        other.set_str(text)
        return comparator.compare(x, other)
    finally:
        other.free()


def eq_str(x: BigInt, text: str) -> bool:
    return compare_str(x, text) is Comparison.EQUAL


# =============================================================================
# TEST TOOLING
# =============================================================================


def bigint_debug(expected_text: str, got: BigInt) -> str:
    """
    Сообщение для тестов: ожидаемая строка против фактического значения.

    Формат: "Expected:\n\t<expected_text>\nGot:\n\t<decimal string of got>"
    """
    return f"Expected:\n\t{expected_text}\nGot:\n\t{conversion.to_decimal_string(got)}"
