# mint_schedule/config/schedule_config.py
from __future__ import annotations

from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from mint_schedule.schedule.definition import PhaseDescriptor, ScheduleDefinition
from mint_schedule.schedule.numeric import to_decimal
from mint_schedule.schedule.pool import Pool


def _decimal(v):
    # YAML 会把 0.994 读成 float，这里按 repr 转换，避免二进制误差
    if isinstance(v, float):
        return to_decimal(v)
    return v


class PhaseConfig(BaseModel):
    cycle_duration_seconds: int = Field(..., ge=0)
    cycles_count: int = Field(..., ge=0)
    cycle_completeness_multiplier: Decimal = Field(..., ge=0)
    pool_shares: Dict[str, Decimal]

    @field_validator("cycle_completeness_multiplier", mode="before")
    @classmethod
    def _multiplier(cls, v):
        return _decimal(v)

    @field_validator("pool_shares", mode="before")
    @classmethod
    def _shares(cls, v):
        return {str(k): _decimal(s) for k, s in dict(v).items()}

    def to_descriptor(self) -> PhaseDescriptor:
        return PhaseDescriptor(
            cycle_duration_seconds=self.cycle_duration_seconds,
            cycles_count=self.cycles_count,
            cycle_completeness_multiplier=self.cycle_completeness_multiplier,
            pool_shares={Pool.parse(k): s for k, s in self.pool_shares.items()},
        )


class ScheduleConfig(BaseModel):
    """
    Schedule 配置（YAML 中 schedule 段）

    share_sets 只用于 YAML anchor 复用，不参与构建。
    """

    phases: List[PhaseConfig] = Field(..., min_length=1)
    output_rate: Decimal = Decimal(1)
    terminal_decay: bool = True
    initial_tick_supply: Decimal = Field(..., ge=0)
    share_sets: Dict[str, Dict[str, Decimal]] = Field(default_factory=dict)

    @field_validator("output_rate", "initial_tick_supply", mode="before")
    @classmethod
    def _amounts(cls, v):
        return _decimal(v)

    @field_validator("share_sets", mode="before")
    @classmethod
    def _share_sets(cls, v):
        return {
            name: {str(k): _decimal(s) for k, s in dict(shares).items()}
            for name, shares in dict(v or {}).items()
        }

    def to_definition(self, owner: str) -> ScheduleDefinition:
        return ScheduleDefinition(
            [p.to_descriptor() for p in self.phases],
            owner=owner,
            output_rate=self.output_rate,
            terminal_decay=self.terminal_decay,
        )
