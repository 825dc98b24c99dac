"""
Comparator — трёхзначное сравнение BigInt

Порядок проверки:
1. Разные знаки → положительное больше
2. Разная длина → длиннее по модулю больше (корректно благодаря нормализации)
3. Сравнение limbs от старшего к младшему, первое расхождение решает
Для отрицательных чисел вердикт по модулю инвертируется.

Сравнение со строкой/u64 выполняется через временный BigInt (bigint.py)
и делегирует в compare().
"""

from enum import IntEnum
from typing import TYPE_CHECKING, Sequence

from src.core.bignum.errors import require_present

if TYPE_CHECKING:
    from src.core.bignum.bigint import BigInt


class Comparison(IntEnum):
    """Результат сравнения."""

    LOWER = -1
    EQUAL = 0
    GREATER = 1

    def inverted(self) -> "Comparison":
        return Comparison(-self.value)


def _significant_length(limbs: Sequence[int]) -> int:
    length = len(limbs)
    while length > 1 and limbs[length - 1] == 0:
        length -= 1
    return length


def compare_limbs(a: Sequence[int], b: Sequence[int]) -> Comparison:
    """
    Сравнение модулей, заданных как последовательности limbs (младший первым).

    Старшие нулевые limbs игнорируются, поэтому scratch-списки до
    нормализации сравниваются корректно.

    Examples:
        >>> compare_limbs([0, 1], [0xFFFFFFFF])
        <Comparison.GREATER: 1>
    """
    len_a = _significant_length(a)
    len_b = _significant_length(b)
    if len_a != len_b:
        return Comparison.GREATER if len_a > len_b else Comparison.LOWER

    for i in range(len_a - 1, -1, -1):
        if a[i] != b[i]:
            return Comparison.GREATER if a[i] > b[i] else Comparison.LOWER
    return Comparison.EQUAL


def compare_magnitude(a: "BigInt", b: "BigInt") -> Comparison:
    """Сравнение |a| и |b|."""
    require_present(a, "a")
    require_present(b, "b")
    return compare_limbs(a.limbs(), b.limbs())


def compare(a: "BigInt", b: "BigInt") -> Comparison:
    """
    Сравнение знаковых значений a и b.

    Returns:
        LOWER если a < b, EQUAL если a == b, GREATER если a > b

    Raises:
        NullInput: если аргумент None или освобождён
    """
    require_present(a, "a")
    require_present(b, "b")

    # Ноль всегда с sign=+1, поэтому разные знаки однозначно решают порядок
    if a.sign != b.sign:
        return Comparison.GREATER if a.sign > b.sign else Comparison.LOWER

    verdict = compare_limbs(a.limbs(), b.limbs())
    return verdict if a.sign > 0 else verdict.inverted()


def eq(a: "BigInt", b: "BigInt") -> bool:
    """a == b по значению."""
    return compare(a, b) is Comparison.EQUAL
