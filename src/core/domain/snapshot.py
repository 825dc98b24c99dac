"""
BigIntSnapshot — диагностический снапшот состояния BigInt

Immutable Pydantic модель, фиксирующая limbs/size/capacity/sign.
Полная совместимость с JSON Schema (src/core/contracts/schema/bigint_snapshot.json).

Модель проверяет инварианты, которые JSON Schema выразить не может:
- len(limbs) == size
- size <= capacity
- нет старшего нулевого limb (кроме нуля)
- ноль только с sign=+1
"""

from typing import Final, List, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

# Максимальное значение limb (u32)
LIMB_MAX: Final[int] = 0xFFFFFFFF


class BigIntSnapshot(BaseModel):
    """
    Снапшот BigInt.

    Immutable модель (frozen=True).
    """

    sign: Literal[1, -1] = Field(..., description="Знак: +1 или -1")
    size: int = Field(..., ge=1, description="Количество активных limbs")
    capacity: int = Field(..., ge=1, description="Выделенная ёмкость в limbs")
    limbs: List[int] = Field(
        ..., min_length=1, description="Активные limbs, младший первым"
    )

    model_config = {"frozen": True}

    @field_validator("limbs")
    @classmethod
    def validate_limb_range(cls, v: List[int]) -> List[int]:
        """Каждый limb в [0, 2^32)."""
        for index, limb in enumerate(v):
            if not 0 <= limb <= LIMB_MAX:
                raise ValueError(f"limb[{index}]={limb} outside [0, {LIMB_MAX}]")
        return v

    @model_validator(mode="after")
    def validate_canonical_form(self) -> "BigIntSnapshot":
        """Согласованность size/capacity/limbs и каноническая форма."""
        if len(self.limbs) != self.size:
            raise ValueError(f"limbs length {len(self.limbs)} != size {self.size}")
        if self.size > self.capacity:
            raise ValueError(f"size {self.size} exceeds capacity {self.capacity}")
        if self.size > 1 and self.limbs[-1] == 0:
            raise ValueError("most significant limb is zero")
        if self.is_zero() and self.sign != 1:
            raise ValueError("zero must have sign +1")
        return self

    def is_zero(self) -> bool:
        return self.size == 1 and self.limbs[0] == 0
