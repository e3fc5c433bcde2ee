from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, Optional, Tuple

from mint_schedule.schedule import numeric
from mint_schedule.schedule.definition import PhaseDescriptor, ScheduleDefinition
from mint_schedule.schedule.pool import Pool
from mint_schedule.schedule.state import ProgressState
from mint_schedule.utils.errors import MisconfiguredSchedule
from mint_schedule.utils.logger import logs
"""
{#!filepath: mint_schedule/schedule/engine.py}

Schedule Engine (FINAL)

Purpose:
- Integrate emission of one pool from state.time up to a target time.

Semantics:
- Time is integer seconds, supplied by the caller.
- Each loop step processes at most one cycle boundary or the final
  partial interval.
- Accrual inside a cycle is linear: elapsed * per-second emission.
- Decay and phase transition happen ONLY when a step lands exactly on
  the end of the current cycle.

Invariants:
- No I/O, no locking.
- target_time <= state.time mints nothing and leaves the state untouched.
- Splitting an interval never changes the total minted.
- Once phase_index == len(phases) nothing is minted any more.
- A state already past the end of its current cycle raises
  MisconfiguredSchedule instead of minting a negative amount.
"""


def _cycle_end(
    definition: ScheduleDefinition, phase: PhaseDescriptor, state: ProgressState
) -> Optional[int]:
    """
    End of the current cycle, or None for a terminal phase that does not cycle.
    """
    if phase.is_terminal and not definition.terminal_decay:
        return None
    return state.cycle_start_time + phase.cycle_duration_seconds


def persist_state_change(
    state: ProgressState,
    phase: PhaseDescriptor,
    boundary: int,
    cycling: bool = True,
) -> None:
    state.time = boundary

    if not cycling or boundary != state.cycle_start_time + phase.cycle_duration_seconds:
        return

    state.next_tick_supply = numeric.decay(
        state.next_tick_supply, phase.cycle_completeness_multiplier
    )
    state.cycle_index += 1
    state.cycle_start_time = boundary
    logs.debug(
        f"[Schedule] {state.pool.value} cycle done phase={state.phase_index} "
        f"cycle={state.cycle_index} t={boundary} supply={state.next_tick_supply}"
    )

    if state.cycle_index == phase.cycles_count:
        state.cycle_index = 0
        state.phase_index += 1
        logs.info(
            f"[Schedule] {state.pool.value} phase -> {state.phase_index} at t={boundary}"
        )


def advance(definition: ScheduleDefinition, state: ProgressState, target_time: int) -> Decimal:
    """
    Advance state in place to target_time and return the amount minted for
    state.pool over that interval.
    """
    if target_time <= state.time:
        return numeric.ZERO

    phases = definition.phases
    result = numeric.ZERO

    while target_time > state.time and state.phase_index < len(phases):
        phase = phases[state.phase_index]

        cycle_end = _cycle_end(definition, phase, state)
        if cycle_end is not None and cycle_end < state.time:
            # 例如 flat 模式下保存的终止阶段 checkpoint，换到 decay 模式后周期早已结束
            raise MisconfiguredSchedule(
                f"{state.pool.value} state at t={state.time} is past its cycle end "
                f"{cycle_end} (phase={state.phase_index} cycle={state.cycle_index})"
            )
        boundary = target_time if cycle_end is None else min(target_time, cycle_end)
        elapsed = boundary - state.time

        rate = numeric.per_second(
            state.next_tick_supply,
            definition.output_rate,
            phase.share(state.pool),
        )
        result = numeric.add(result, numeric.accrue(elapsed, rate))

        persist_state_change(state, phase, boundary, cycling=cycle_end is not None)

        if state.phase_index == len(phases):
            logs.info(f"[Schedule] {state.pool.value} exhausted at t={state.time}")

    return result


class ScheduleEngine:
    """
    Engine bound to one ScheduleDefinition.

    Contract:
    - advance() mutates the given state in place
    - make_progress() leaves the given state untouched and returns a new one
    - the caller serializes access per state
    """

    def __init__(self, definition: ScheduleDefinition):
        self.definition = definition

    def advance(self, state: ProgressState, target_time: int) -> Decimal:
        return advance(self.definition, state, target_time)

    def make_progress(
        self, state: ProgressState, target_time: int
    ) -> Tuple[Decimal, ProgressState]:
        new_state = state.copy()
        minted = advance(self.definition, new_state, target_time)
        return minted, new_state

    def advance_pools(
        self, states: Iterable[ProgressState], target_time: int
    ) -> Dict[Pool, Decimal]:
        states = list(states)
        pools = [s.pool for s in states]
        if len(set(pools)) != len(pools):
            raise ValueError(f"one state per pool expected, got {[p.value for p in pools]}")

        return {state.pool: self.advance(state, target_time) for state in states}

    def is_exhausted(self, state: ProgressState) -> bool:
        return state.is_exhausted(self.definition)
