"""
Normalizer — каноническая форма BigInt

После любой мутации:
- старший активный limb ненулевой (кроме нуля)
- ноль имеет ровно одно представление: size=1, limb[0]=0, sign=+1
"""

from typing import TYPE_CHECKING, List

from src.core.bignum.errors import require_present

if TYPE_CHECKING:
    from src.core.bignum.bigint import BigInt


def trim_limbs(limbs: List[int]) -> List[int]:
    """
    Удаляет старшие нулевые limbs из scratch-списка (in place).

    Пустой список превращается в [0].

    Examples:
        >>> trim_limbs([5, 0, 0])
        [5]
        >>> trim_limbs([])
        [0]
    """
    while len(limbs) > 1 and limbs[-1] == 0:
        limbs.pop()
    if not limbs:
        limbs.append(0)
    return limbs


def normalize(x: "BigInt") -> "BigInt":
    """
    Восстанавливает каноническую форму x (in place). Идемпотентна.

    Returns:
        x
    """
    require_present(x, "x")
    size = x.size
    while size > 1 and x.limb(size - 1) == 0:
        size -= 1
    x.size = size
    if size == 1 and x.limb(0) == 0:
        # Отрицательного нуля не бывает
        x.sign = 1
    return x
