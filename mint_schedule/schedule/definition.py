from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from mint_schedule.schedule.numeric import ONE, ZERO, Numeric, to_decimal
from mint_schedule.schedule.pool import Pool
from mint_schedule.utils.errors import (
    InvalidRate,
    MisconfiguredSchedule,
    Unauthorized,
    UnmappedPool,
)
from mint_schedule.utils.logger import logs
"""
{#!filepath: mint_schedule/schedule/definition.py}

Schedule Definition (FROZEN SHAPE)

Defines the shape of emission over the lifetime of the schedule.

Invariants:
- phases are fixed at construction; only output_rate may change afterwards
- every phase carries a non-negative share for every Pool
- cycle_duration_seconds > 0 for every phase
- a terminal phase (cycles_count == 0) can only be the last one
- 0 <= output_rate <= 1
- output_rate is mutated only by the owner
"""


@dataclass(frozen=True)
class PhaseDescriptor:
    cycle_duration_seconds: int
    cycles_count: int
    cycle_completeness_multiplier: Decimal
    pool_shares: Mapping[Pool, Decimal] = field(default_factory=dict)

    def __post_init__(self):
        shares = {}
        try:
            for pool, share in dict(self.pool_shares).items():
                shares[Pool.parse(pool)] = to_decimal(share)
            multiplier = to_decimal(self.cycle_completeness_multiplier)
        except InvalidOperation:
            raise MisconfiguredSchedule(
                f"phase has a non-numeric multiplier or share: {self!r}"
            ) from None

        missing = [p.value for p in Pool if p not in shares]
        if missing:
            raise UnmappedPool(f"phase has no share for pools: {missing}")

        # frozen dataclass：只能通过 object.__setattr__ 规范化字段
        object.__setattr__(self, "pool_shares", MappingProxyType(shares))
        object.__setattr__(self, "cycle_completeness_multiplier", multiplier)

    @property
    def is_terminal(self) -> bool:
        return self.cycles_count == 0

    def share(self, pool: Pool) -> Decimal:
        return self.pool_shares[pool]


class ScheduleDefinition:
    """
    Ordered phases + global output-rate throttle.

    The owner is an externally supplied identity. set_output_rate and
    transfer_ownership compare the caller against it before mutating.

    terminal_decay selects the terminal-phase policy:
    - True: the terminal phase keeps completing cycles and decaying forever
    - False: the terminal phase accrues at a flat rate, no cycles, no decay
    """

    def __init__(
        self,
        phases: Iterable[PhaseDescriptor],
        *,
        owner: str,
        output_rate: Numeric = ONE,
        terminal_decay: bool = True,
    ):
        self._phases: Tuple[PhaseDescriptor, ...] = tuple(phases)
        self._owner = owner
        self._terminal_decay = bool(terminal_decay)

        self._validate()

        self._output_rate = self._parse_rate(output_rate)

    # --------------------------------------------------
    # validation
    # --------------------------------------------------
    def _validate(self) -> None:
        if not self._phases:
            raise MisconfiguredSchedule("schedule has no phases")

        last = len(self._phases) - 1
        for i, phase in enumerate(self._phases):
            if phase.cycle_duration_seconds <= 0:
                raise MisconfiguredSchedule(
                    f"phase {i}: cycle_duration_seconds must be > 0, "
                    f"got {phase.cycle_duration_seconds}"
                )
            if phase.cycles_count < 0:
                raise MisconfiguredSchedule(
                    f"phase {i}: cycles_count must be >= 0, got {phase.cycles_count}"
                )
            if phase.is_terminal and i != last:
                raise MisconfiguredSchedule(
                    f"phase {i}: cycles_count == 0 marks the terminal phase, "
                    f"but {last - i} phase(s) follow it"
                )
            if not phase.cycle_completeness_multiplier.is_finite():
                raise MisconfiguredSchedule(
                    f"phase {i}: non-finite cycle_completeness_multiplier"
                )
            if phase.cycle_completeness_multiplier < ZERO:
                raise MisconfiguredSchedule(
                    f"phase {i}: negative cycle_completeness_multiplier"
                )
            # NaN 无法比较大小，先排除非有限值
            non_finite = [
                p.value for p, s in phase.pool_shares.items() if not s.is_finite()
            ]
            if non_finite:
                raise MisconfiguredSchedule(
                    f"phase {i}: non-finite share for {non_finite}"
                )
            negative = [p.value for p, s in phase.pool_shares.items() if s < ZERO]
            if negative:
                raise MisconfiguredSchedule(f"phase {i}: negative share for {negative}")

    @classmethod
    def _parse_rate(cls, rate: Numeric) -> Decimal:
        try:
            value = to_decimal(rate)
        except InvalidOperation:
            raise InvalidRate(f"output rate is not a number: {rate!r}") from None
        cls._check_rate(value)
        return value

    @staticmethod
    def _check_rate(rate: Decimal) -> None:
        if not rate.is_finite() or rate > ONE or rate < ZERO:
            raise InvalidRate(f"output rate must be within [0, 1], got {rate}")

    # --------------------------------------------------
    # read access
    # --------------------------------------------------
    @property
    def phases(self) -> Tuple[PhaseDescriptor, ...]:
        return self._phases

    @property
    def output_rate(self) -> Decimal:
        return self._output_rate

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def terminal_decay(self) -> bool:
        return self._terminal_decay

    def phase(self, index: int) -> PhaseDescriptor:
        return self._phases[index]

    def __len__(self) -> int:
        return len(self._phases)

    def __repr__(self) -> str:
        return (
            f"ScheduleDefinition(phases={len(self._phases)}, "
            f"output_rate={self._output_rate}, terminal_decay={self._terminal_decay})"
        )

    # --------------------------------------------------
    # owner-gated mutation
    # --------------------------------------------------
    def _require_owner(self, caller: str) -> None:
        if caller != self._owner:
            logs.warning(f"[Schedule] rejected call from non-owner {caller!r}")
            raise Unauthorized(f"{caller!r} is not the schedule owner")

    def set_output_rate(self, caller: str, rate: Numeric) -> None:
        self._require_owner(caller)

        value = self._parse_rate(rate)

        logs.info(f"[Schedule] output_rate {self._output_rate} -> {value}")
        self._output_rate = value

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        self._require_owner(caller)

        logs.info(f"[Schedule] ownership {self._owner!r} -> {new_owner!r}")
        self._owner = new_owner
