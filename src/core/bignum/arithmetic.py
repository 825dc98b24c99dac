"""
Arithmetic Core — сложение, вычитание, умножение BigInt

Модуль реализует школьные алгоритмы в системе счисления 2^32:
- magnitude_add / magnitude_sub / magnitude_multiply над списками limbs
- знаковые add / subtract / negate / multiply над BigInt

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Выход может совпадать с любым входом (aliasing): результат считается в
   scratch-список и записывается в out только после успешного выделения
2. magnitude_sub требует |a| >= |b| и проверяет это явно
3. Отрицательный ноль не возникает: при разных знаках вычитание выбирается
   сравнением модулей, равные модули дают канонический ноль
4. Произведение limbs считается в двойной ширине (mul_limb_wide)
"""

from typing import TYPE_CHECKING, List, Optional, Sequence

from src.core.bignum.comparator import Comparison, compare_limbs
from src.core.bignum.errors import MagnitudeUnderflow, require_present
from src.core.bignum.limbs import LIMB_BASE, LIMB_BITS, LIMB_MASK, mul_limb_wide
from src.core.bignum.normalizer import trim_limbs

if TYPE_CHECKING:
    from src.core.bignum.bigint import BigInt


# =============================================================================
# MAGNITUDE OPERATIONS
# =============================================================================


def magnitude_add(a: Sequence[int], b: Sequence[int]) -> List[int]:
    """
    Сумма модулей с распространением переноса.

    Длина результата: max(len(a), len(b)), +1 при финальном переносе.

    Examples:
        >>> magnitude_add([0xFFFFFFFF], [1])
        [0, 1]
    """
    if len(a) < len(b):
        a, b = b, a

    result: List[int] = []
    carry = 0
    for i in range(len(a)):
        total = a[i] + (b[i] if i < len(b) else 0) + carry
        result.append(total & LIMB_MASK)
        carry = total >> LIMB_BITS
    if carry:
        result.append(carry)
    return result


def magnitude_sub(a: Sequence[int], b: Sequence[int]) -> List[int]:
    """
    Разность модулей |a| - |b| с распространением заёма.

    Args:
        a: уменьшаемое (limbs, младший первым)
        b: вычитаемое, |b| <= |a|

    Returns:
        Нормализованный список limbs разности

    Raises:
        MagnitudeUnderflow: если |a| < |b|

    Examples:
        >>> magnitude_sub([0, 1], [1])
        [4294967295]
    """
    if compare_limbs(a, b) is Comparison.LOWER:
        raise MagnitudeUnderflow(
            f"Magnitude subtraction underflow: minuend has {len(a)} limbs, "
            f"subtrahend has {len(b)} limbs and is larger"
        )

    result: List[int] = []
    borrow = 0
    for i in range(len(a)):
        diff = a[i] - (b[i] if i < len(b) else 0) - borrow
        if diff < 0:
            diff += LIMB_BASE
            borrow = 1
        else:
            borrow = 0
        result.append(diff)
    return trim_limbs(result)


def magnitude_multiply(a: Sequence[int], b: Sequence[int]) -> List[int]:
    """
    Произведение модулей (длинное умножение).

    Для каждой пары (i, j) произведение a[i]*b[j] в двойной ширине
    накапливается в result[i+j], перенос уходит в result[i+j+1].
    Длина результата <= len(a) + len(b).

    Examples:
        >>> magnitude_multiply([0xFFFFFFFF], [0xFFFFFFFF])
        [1, 4294967294]
    """
    result = [0] * (len(a) + len(b))
    for i, limb_a in enumerate(a):
        if limb_a == 0:
            continue
        carry = 0
        for j, limb_b in enumerate(b):
            hi, lo = mul_limb_wide(limb_a, limb_b)
            # hi + (acc >> 32) == (a*b + result + carry) >> 32 < 2^32
            acc = lo + result[i + j] + carry
            result[i + j] = acc & LIMB_MASK
            carry = hi + (acc >> LIMB_BITS)
        result[i + len(b)] = carry
    return trim_limbs(result)


# =============================================================================
# SIGNED OPERATIONS
# =============================================================================


def _signed_sum(
    a: Sequence[int], a_sign: int, b: Sequence[int], b_sign: int
) -> tuple[List[int], int]:
    if a_sign == b_sign:
        return magnitude_add(a, b), a_sign

    verdict = compare_limbs(a, b)
    if verdict is Comparison.EQUAL:
        return [0], 1
    if verdict is Comparison.GREATER:
        return magnitude_sub(a, b), a_sign
    return magnitude_sub(b, a), b_sign


def add(x: "BigInt", y: "BigInt", out: "BigInt") -> "BigInt":
    """
    out = x + y.

    Одинаковые знаки → сумма модулей с этим знаком.
    Разные знаки → разность большего и меньшего модулей со знаком большего.

    Raises:
        NullInput: если аргумент None или освобождён
        AllocationFailure: out не смог вырасти (out не изменён)
    """
    require_present(x, "x")
    require_present(y, "y")
    require_present(out, "out")

    limbs, sign = _signed_sum(x.limbs(), x.sign, y.limbs(), y.sign)
    return out.assign(limbs, sign)


def subtract(x: "BigInt", y: "BigInt", out: "BigInt") -> "BigInt":
    """
    out = x - y (y не изменяется).

    Реализовано как сложение с y противоположного знака.
    """
    require_present(x, "x")
    require_present(y, "y")
    require_present(out, "out")

    limbs, sign = _signed_sum(x.limbs(), x.sign, y.limbs(), -y.sign)
    return out.assign(limbs, sign)


def negate(x: "BigInt", out: Optional["BigInt"] = None) -> "BigInt":
    """
    out = -x. Без out операция выполняется in place.

    Канонический ноль остаётся с sign=+1.
    """
    require_present(x, "x")
    if out is None:
        out = x
    require_present(out, "out")

    sign = x.sign if x.is_zero() else -x.sign
    return out.assign(x.limbs(), sign)


def multiply(x: "BigInt", y: "BigInt", out: "BigInt") -> "BigInt":
    """
    out = x * y.

    Знак равен XOR знаков операндов; если хотя бы один операнд ноль,
    результатом будет канонический ноль независимо от знаков.
    """
    require_present(x, "x")
    require_present(y, "y")
    require_present(out, "out")

    if x.is_zero() or y.is_zero():
        return out.assign([0], 1)

    limbs = magnitude_multiply(x.limbs(), y.limbs())
    return out.assign(limbs, x.sign * y.sign)
