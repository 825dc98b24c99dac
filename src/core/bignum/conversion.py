"""
Base Conversion — десятичная строка ⇄ limbs, побитовый дамп

- parse_decimal: "-123" → (sign, limbs) через fused multiply-add на один limb
- to_decimal_string: повторное короткое деление модуля на 10
- to_binary_string: СЫРОЙ дамп битов limbs (не позиционная двоичная запись
  знакового числа; знак не выводится)

to_decimal_string(parse(s)) восстанавливает каноническую форму s:
без ведущих нулей, "-0" → "0".
"""

from typing import TYPE_CHECKING, Final, List

from src.core.bignum.errors import InvalidFormat, NullInput, require_present
from src.core.bignum.limbs import LIMB_BITS, LIMB_MASK, mul_limb_wide
from src.core.bignum.normalizer import trim_limbs

if TYPE_CHECKING:
    from src.core.bignum.bigint import BigInt


DECIMAL_BASE: Final[int] = 10
_DIGITS: Final[str] = "0123456789"
_MINUS: Final[str] = "-"


# =============================================================================
# SINGLE-LIMB PRIMITIVES
# =============================================================================


def mul_small_add(limbs: List[int], multiplier: int, addend: int) -> List[int]:
    """
    limbs = limbs * multiplier + addend (in place).

    multiplier и addend должны помещаться в один limb.

    Examples:
        >>> mul_small_add([0xFFFFFFFF], 10, 5)
        [4294967291, 9]
    """
    carry = addend
    for i, limb in enumerate(limbs):
        hi, lo = mul_limb_wide(limb, multiplier)
        acc = lo + carry
        limbs[i] = acc & LIMB_MASK
        carry = hi + (acc >> LIMB_BITS)
    if carry:
        limbs.append(carry)
    return limbs


def divmod_small(limbs: List[int], divisor: int) -> int:
    """
    Короткое деление limbs на divisor (in place), возвращает остаток.

    Один проход от старшего limb к младшему: остаток каждого limb
    переносится в следующий младший.
    """
    if not 0 < divisor <= LIMB_MASK:
        raise InvalidFormat(f"Short division divisor {divisor} outside (0, {LIMB_MASK}]")
    remainder = 0
    for i in range(len(limbs) - 1, -1, -1):
        current = (remainder << LIMB_BITS) | limbs[i]
        limbs[i], remainder = divmod(current, divisor)
    return remainder


# =============================================================================
# DECIMAL
# =============================================================================


def parse_decimal(text: str) -> tuple[int, List[int]]:
    """
    Разбор десятичной строки с необязательным ведущим '-'.

    Args:
        text: например "-20", "000123"

    Returns:
        (sign, limbs): sign ±1, нормализованные limbs (младший первым).
        Для нуля sign всегда +1.

    Raises:
        NullInput: text is None
        InvalidFormat: пустая строка, знак без цифр, посторонние символы
    """
    if text is None:
        raise NullInput("Decimal string is None")
    if not isinstance(text, str):
        raise InvalidFormat(f"Decimal string must be str, got {type(text).__name__}")
    if not text:
        raise InvalidFormat("Decimal string is empty")

    sign = 1
    digits = text
    if text[0] == _MINUS:
        sign = -1
        digits = text[1:]
    if not digits:
        raise InvalidFormat(f"Sign without digits in decimal string {text!r}")

    limbs = [0]
    offset = len(text) - len(digits)
    for position, char in enumerate(digits, start=offset):
        if char not in _DIGITS:
            raise InvalidFormat(
                f"Invalid character {char!r} at position {position} in decimal string {text!r}"
            )
        mul_small_add(limbs, DECIMAL_BASE, ord(char) - ord("0"))

    trim_limbs(limbs)
    if limbs == [0]:
        sign = 1
    return sign, limbs


def to_decimal_string(x: "BigInt") -> str:
    """
    Десятичная запись x.

    Каждый проход короткого деления на 10 извлекает одну цифру;
    '-' добавляется только для отрицательного ненулевого значения.
    """
    require_present(x, "x")
    limbs = x.limbs()
    if limbs == [0]:
        return "0"

    digits: List[str] = []
    while limbs != [0]:
        digits.append(_DIGITS[divmod_small(limbs, DECIMAL_BASE)])
        trim_limbs(limbs)

    if x.sign < 0:
        digits.append(_MINUS)
    return "".join(reversed(digits))


def set_from_string(text: str, out: "BigInt") -> "BigInt":
    """
    out = значение десятичной строки text.

    При ошибке разбора или выделения out не изменяется.
    """
    require_present(out, "out")
    sign, limbs = parse_decimal(text)
    return out.assign(limbs, sign)


# =============================================================================
# BINARY DUMP
# =============================================================================


def to_binary_string(x: "BigInt", strip_leading_zeros: bool = False) -> str:
    """
    Сырой дамп битов активных limbs: по 32 бита на limb, старший limb первым.

    ВНИМАНИЕ: это не двоичная запись знакового числа: знак не выводится,
    ширина кратна 32. Для значения используйте to_decimal_string.

    Args:
        x: BigInt
        strip_leading_zeros: убрать ведущие нулевые биты (минимум один "0")

    Examples:
        дамп 5: '00000000000000000000000000000101'
        дамп 5 со strip_leading_zeros=True: '101'
    """
    require_present(x, "x")
    dump = "".join(format(limb, f"0{LIMB_BITS}b") for limb in reversed(x.limbs()))
    if strip_leading_zeros:
        return dump.lstrip("0") or "0"
    return dump
