from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from mint_schedule.schedule.numeric import Numeric, to_decimal
from mint_schedule.schedule.pool import Pool
from mint_schedule.utils.errors import InvalidState
# mint_schedule/schedule/state.py


@dataclass
class ProgressState:
    """
    Durable checkpoint of emission progress for one pool.

    - Mutated ONLY by the schedule engine
    - time / phase_index / cycle_start_time never decrease
    - cycle_index resets to 0 exactly on phase transition
    - next_tick_supply: base emission per second, before share and output rate

    At most one mutator per state at a time; the engine does not lock.
    """

    pool: Pool
    time: int = 0
    phase_index: int = 0
    cycle_index: int = 0
    cycle_start_time: int = 0
    next_tick_supply: Decimal = Decimal(0)

    def __post_init__(self):
        self.pool = Pool.parse(self.pool)
        try:
            self.next_tick_supply = to_decimal(self.next_tick_supply)
        except InvalidOperation:
            raise InvalidState(
                f"next_tick_supply is not a number: {self.next_tick_supply!r}"
            ) from None

        # 比较前先排除 NaN / Infinity
        if not self.next_tick_supply.is_finite() or self.next_tick_supply < 0:
            raise InvalidState(
                f"next_tick_supply must be finite and >= 0, got {self.next_tick_supply}"
            )
        if self.phase_index < 0 or self.cycle_index < 0:
            raise InvalidState(
                f"negative index: phase={self.phase_index} cycle={self.cycle_index}"
            )

    @classmethod
    def start(cls, pool: Pool, next_tick_supply: Numeric, start_time: int = 0) -> ProgressState:
        return cls(
            pool=pool,
            time=start_time,
            phase_index=0,
            cycle_index=0,
            cycle_start_time=start_time,
            next_tick_supply=next_tick_supply,
        )

    def copy(self) -> ProgressState:
        return replace(self)

    def is_exhausted(self, definition) -> bool:
        return self.phase_index >= len(definition.phases)

    # ---------- 序列化（宿主持久化用） ----------
    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["pool"] = self.pool.value
        d["next_tick_supply"] = str(self.next_tick_supply)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> ProgressState:
        return cls(
            pool=Pool.parse(d["pool"]),
            time=int(d["time"]),
            phase_index=int(d["phase_index"]),
            cycle_index=int(d["cycle_index"]),
            cycle_start_time=int(d["cycle_start_time"]),
            next_tick_supply=d["next_tick_supply"],
        )
