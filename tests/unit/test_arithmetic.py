"""
Тесты для Arithmetic Core

Проверяет:
1. Сложение/вычитание модулей с переносом и заёмом
2. Знаковые add/subtract/negate с выбором по сравнению модулей
3. Умножение в двойной ширине, знак, умножение на ноль
4. Алгебраические свойства (коммутативность, ассоциативность, a + (-a) = 0)
5. Aliasing выхода со входом
6. Сохранение цели при AllocationFailure
"""

import itertools

import pytest

from src.core.bignum import (
    AllocationFailure,
    BigInt,
    BigIntConfig,
    MagnitudeUnderflow,
    NullInput,
    add,
    eq,
    magnitude_add,
    magnitude_multiply,
    magnitude_sub,
    multiply,
    negate,
    subtract,
)

SAMPLES = [
    0,
    1,
    -1,
    7,
    -7,
    2**32 - 1,
    -(2**32 - 1),
    2**32,
    2**64 - 1,
    -(2**64),
    10**18,
    -(10**30) + 12345,
    2**128,
    -(2**160 - 3),
]

PAIRS = list(itertools.product(SAMPLES, repeat=2))


def _result(op, a: int, b: int) -> BigInt:
    out = BigInt.init()
    return op(BigInt.from_int(a), BigInt.from_int(b), out)


# =============================================================================
# MAGNITUDE OPERATIONS
# =============================================================================


class TestMagnitudeAdd:
    """Тесты magnitude_add"""

    def test_carry_into_new_limb(self) -> None:
        assert magnitude_add([0xFFFFFFFF], [1]) == [0, 1]

    def test_carry_chain(self) -> None:
        assert magnitude_add([0xFFFFFFFF, 0xFFFFFFFF], [1]) == [0, 0, 1]

    def test_length_is_max_without_carry(self) -> None:
        assert magnitude_add([1], [2, 3, 4]) == [3, 3, 4]


class TestMagnitudeSub:
    """Тесты magnitude_sub"""

    def test_borrow(self) -> None:
        assert magnitude_sub([0, 1], [1]) == [0xFFFFFFFF]

    def test_borrow_chain_normalized(self) -> None:
        assert magnitude_sub([0, 0, 1], [1]) == [0xFFFFFFFF, 0xFFFFFFFF]

    def test_equal_gives_zero(self) -> None:
        assert magnitude_sub([5, 6], [5, 6]) == [0]

    def test_underflow_rejected(self) -> None:
        """|a| < |b| → MagnitudeUnderflow вместо некорректного результата"""
        with pytest.raises(MagnitudeUnderflow):
            magnitude_sub([1], [0, 1])
        with pytest.raises(ValueError):
            magnitude_sub([3], [4])


class TestMagnitudeMultiply:
    """Тесты magnitude_multiply"""

    def test_max_limbs(self) -> None:
        assert magnitude_multiply([0xFFFFFFFF], [0xFFFFFFFF]) == [1, 0xFFFFFFFE]

    def test_length_bound(self) -> None:
        a = [0xFFFFFFFF] * 3
        b = [0xFFFFFFFF] * 4
        assert len(magnitude_multiply(a, b)) <= len(a) + len(b)

    def test_by_zero(self) -> None:
        assert magnitude_multiply([1, 2, 3], [0]) == [0]


# =============================================================================
# ADD / SUBTRACT
# =============================================================================


class TestAdd:
    """Тесты add"""

    def test_carry_across_decimal_boundary(self) -> None:
        """999999999999999999 + 1 == 1000000000000000000"""
        out = BigInt.init()
        add(BigInt.from_str("999999999999999999"), BigInt.from_str("1"), out)
        assert eq(out, BigInt.from_str("1000000000000000000"))

    def test_different_signs_larger_negative(self) -> None:
        assert _result(add, 3, -10).to_int() == -7

    def test_different_signs_larger_positive(self) -> None:
        assert _result(add, -3, 10).to_int() == 7

    def test_opposites_give_canonical_zero(self) -> None:
        """a + (-a) даёт канонический ноль"""
        for value in SAMPLES:
            a = BigInt.from_int(value)
            out = add(a, negate(a.copy()), BigInt.init())
            assert out.is_zero()
            assert out.sign == 1
            assert out.size == 1

    def test_zero_operand_returns_copy(self) -> None:
        assert _result(add, 0, -(2**70)).to_int() == -(2**70)
        assert _result(add, 2**70, 0).to_int() == 2**70

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_matches_int(self, a: int, b: int) -> None:
        assert _result(add, a, b).to_int() == a + b

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_commutative(self, a: int, b: int) -> None:
        assert eq(_result(add, a, b), _result(add, b, a))

    @pytest.mark.parametrize("a,b,c", list(itertools.combinations(SAMPLES, 3))[:60])
    def test_associative(self, a: int, b: int, c: int) -> None:
        x, y, z = BigInt.from_int(a), BigInt.from_int(b), BigInt.from_int(c)
        left = add(add(x, y, BigInt.init()), z, BigInt.init())
        right = add(x, add(y, z, BigInt.init()), BigInt.init())
        assert eq(left, right)

    def test_output_aliases_input(self) -> None:
        """x = x + x"""
        x = BigInt.from_int(2**64 - 1)
        add(x, x, x)
        assert x.to_int() == 2 * (2**64 - 1)

    def test_output_aliases_second_input(self) -> None:
        x = BigInt.from_int(5)
        y = BigInt.from_int(-(2**40))
        add(x, y, y)
        assert y.to_int() == 5 - 2**40
        assert x.to_int() == 5

    def test_output_grows(self) -> None:
        out = BigInt.init(2)
        add(BigInt.from_int(2**200), BigInt.from_int(1), out)
        assert out.capacity >= 7
        assert out.to_int() == 2**200 + 1

    def test_allocation_failure_leaves_output_intact(self) -> None:
        """Цель сохраняет прежнее значение при AllocationFailure"""
        out = BigInt.init(2, BigIntConfig(max_capacity=2)).set_int(42, -1)
        with pytest.raises(AllocationFailure):
            add(BigInt.from_int(2**100), BigInt.from_int(1), out)
        assert out.to_int() == -42
        assert out.capacity == 2

    def test_none_rejected(self) -> None:
        with pytest.raises(NullInput):
            add(BigInt.init(), None, BigInt.init())
        with pytest.raises(NullInput):
            add(BigInt.init(), BigInt.init(), None)


class TestSubtract:
    """Тесты subtract"""

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_matches_int(self, a: int, b: int) -> None:
        assert _result(subtract, a, b).to_int() == a - b

    def test_self_subtraction_is_canonical_zero(self) -> None:
        x = BigInt.from_int(-(2**90))
        subtract(x, x, x)
        assert x.is_zero()
        assert x.sign == 1

    def test_subtrahend_not_mutated(self) -> None:
        y = BigInt.from_int(9)
        subtract(BigInt.from_int(1), y, BigInt.init())
        assert y.to_int() == 9

    def test_zero_minus_value(self) -> None:
        assert _result(subtract, 0, 2**70).to_int() == -(2**70)


class TestNegate:
    """Тесты negate"""

    def test_flips_sign(self) -> None:
        x = BigInt.from_int(12)
        negate(x)
        assert x.to_int() == -12

    def test_zero_stays_positive(self) -> None:
        x = BigInt.init()
        negate(x)
        assert x.sign == 1

    def test_into_output(self) -> None:
        x = BigInt.from_int(-3)
        out = negate(x, BigInt.init())
        assert out.to_int() == 3
        assert x.to_int() == -3


# =============================================================================
# MULTIPLY
# =============================================================================


class TestMultiply:
    """Тесты multiply"""

    def test_by_zero_is_canonical_zero(self) -> None:
        """2^128 * 0 == 0"""
        out = BigInt.init()
        multiply(
            BigInt.from_str("340282366920938463463374607431768211456"),
            BigInt.from_str("0"),
            out,
        )
        assert eq(out, BigInt.from_str("0"))

    @pytest.mark.parametrize("value", [-(2**64), -1, 5, 2**100])
    def test_zero_product_sign_positive(self, value: int) -> None:
        """Умножение на ноль даёт sign=+1 при любом знаке операнда"""
        out = _result(multiply, value, 0)
        assert out.is_zero()
        assert out.sign == 1
        assert out.size == 1

    def test_signs(self) -> None:
        assert _result(multiply, -3, 4).to_int() == -12
        assert _result(multiply, -3, -4).to_int() == 12

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_matches_int(self, a: int, b: int) -> None:
        assert _result(multiply, a, b).to_int() == a * b

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_commutative(self, a: int, b: int) -> None:
        assert eq(_result(multiply, a, b), _result(multiply, b, a))

    def test_output_aliases_input(self) -> None:
        """x = x * x"""
        x = BigInt.from_int(-(2**70 + 3))
        multiply(x, x, x)
        assert x.to_int() == (2**70 + 3) ** 2

    def test_result_length_bound(self) -> None:
        a = BigInt.from_int(2**96 - 1)
        b = BigInt.from_int(2**64 - 1)
        out = multiply(a, b, BigInt.init())
        assert out.size <= a.size + b.size
