"""
BigIntConfig — параметры выделения памяти для BigInt

Immutable Pydantic модель с параметрами ёмкости буфера limbs:
- min_capacity: нижняя граница ёмкости (запросы ниже неё поднимаются до неё)
- growth_factor: множитель роста при переполнении (амортизированный O(1))
- max_capacity: верхняя граница (None = без ограничения); превышение → AllocationFailure
"""

from typing import Final, Optional

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ПАРАМЕТРЫ ПО УМОЛЧАНИЮ
# =============================================================================

# Минимальная ёмкость буфера limbs (u64 помещается без роста)
MIN_CAPACITY: Final[int] = 2

# Ёмкость удваивается при переполнении
GROWTH_FACTOR_DEFAULT: Final[int] = 2


# =============================================================================
# CONFIG MODEL
# =============================================================================


class BigIntConfig(BaseModel):
    """
    Параметры ёмкости BigInt.

    Immutable модель (frozen=True): один экземпляр разделяется всеми BigInt,
    созданными с ним.
    """

    min_capacity: int = Field(MIN_CAPACITY, ge=1, description="Минимальная ёмкость в limbs")
    growth_factor: int = Field(
        GROWTH_FACTOR_DEFAULT, ge=2, description="Множитель роста ёмкости"
    )
    max_capacity: Optional[int] = Field(
        None, ge=1, description="Максимальная ёмкость в limbs (None = без ограничения)"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_capacity_bounds(self) -> "BigIntConfig":
        """max_capacity не может быть меньше min_capacity."""
        if self.max_capacity is not None and self.max_capacity < self.min_capacity:
            raise ValueError(
                f"max_capacity {self.max_capacity} below min_capacity {self.min_capacity}"
            )
        return self

    def clamp_capacity(self, requested: int) -> int:
        """Поднимает запрошенную ёмкость до min_capacity."""
        return max(requested, self.min_capacity)

    def grown_capacity(self, current: int, required: int) -> int:
        """
        Новая ёмкость при росте буфера.

        Умножает current на growth_factor, пока не покроет required.
        Не ограничивается max_capacity: проверку выполняет LimbStore.

        Examples:
            >>> BigIntConfig().grown_capacity(2, 5)
            8
        """
        capacity = max(current, self.min_capacity)
        while capacity < required:
            capacity *= self.growth_factor
        return capacity


DEFAULT_CONFIG: Final[BigIntConfig] = BigIntConfig()
