"""
Bignum — целые произвольной точности для CAMEL

Знаковые целые неограниченной величины в системе счисления 2^32:
представление, нормализация, сравнение, арифметика, десятичная/двоичная
конверсия.
"""

# Errors
from src.core.bignum.errors import (
    AllocationFailure,
    BigIntError,
    InvalidFormat,
    InvalidIndex,
    InvalidSize,
    MagnitudeUnderflow,
    NullInput,
    Status,
    status_to_str,
)

# Configuration
from src.core.bignum.config import (
    DEFAULT_CONFIG,
    GROWTH_FACTOR_DEFAULT,
    MIN_CAPACITY,
    BigIntConfig,
)

# Limb store
from src.core.bignum.limbs import (
    LIMB_BASE,
    LIMB_BITS,
    LIMB_MASK,
    WIDE_MASK,
    LimbStore,
    mul_limb_wide,
)

# Normalizer
from src.core.bignum.normalizer import normalize, trim_limbs

# Comparator
from src.core.bignum.comparator import (
    Comparison,
    compare,
    compare_limbs,
    compare_magnitude,
    eq,
)

# Arithmetic
from src.core.bignum.arithmetic import (
    add,
    magnitude_add,
    magnitude_multiply,
    magnitude_sub,
    multiply,
    negate,
    subtract,
)

# Base conversion
from src.core.bignum.conversion import (
    divmod_small,
    mul_small_add,
    parse_decimal,
    set_from_string,
    to_binary_string,
    to_decimal_string,
)

# Façade
from src.core.bignum.bigint import (
    BIGINT_HEADER_BYTES,
    BigInt,
    bigint_debug,
    compare_int,
    compare_str,
    copy_into,
    eq_int,
    eq_str,
)

__all__ = [
    # Errors
    "AllocationFailure",
    "BigIntError",
    "InvalidFormat",
    "InvalidIndex",
    "InvalidSize",
    "MagnitudeUnderflow",
    "NullInput",
    "Status",
    "status_to_str",
    # Configuration
    "DEFAULT_CONFIG",
    "GROWTH_FACTOR_DEFAULT",
    "MIN_CAPACITY",
    "BigIntConfig",
    # Limb store
    "LIMB_BASE",
    "LIMB_BITS",
    "LIMB_MASK",
    "WIDE_MASK",
    "LimbStore",
    "mul_limb_wide",
    # Normalizer
    "normalize",
    "trim_limbs",
    # Comparator
    "Comparison",
    "compare",
    "compare_limbs",
    "compare_magnitude",
    "eq",
    # Arithmetic
    "add",
    "magnitude_add",
    "magnitude_multiply",
    "magnitude_sub",
    "multiply",
    "negate",
    "subtract",
    # Base conversion
    "divmod_small",
    "mul_small_add",
    "parse_decimal",
    "set_from_string",
    "to_binary_string",
    "to_decimal_string",
    # Façade
    "BIGINT_HEADER_BYTES",
    "BigInt",
    "bigint_debug",
    "compare_int",
    "compare_str",
    "copy_into",
    "eq_int",
    "eq_str",
]
