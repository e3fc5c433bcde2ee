from __future__ import annotations

from decimal import Decimal

import pytest

from mint_schedule.schedule import Pool, ProgressState, ScheduleDefinition, advance
from mint_schedule.schedule.numeric import add
from tests.conftest import OWNER, make_phase


@pytest.fixture
def decaying_definition() -> ScheduleDefinition:
    """
    非整除的衰减系数，保证截断真的发生
    """
    return ScheduleDefinition(
        [
            make_phase(100, 3, "0.994", PRIMARY="0.72", BONUS="0.08", TEAM="0.2"),
            make_phase(70, 2, "0.333", PRIMARY="0.392", BONUS="0.098", NOMINEX="0.3"),
            make_phase(50, 0, "0.9", PRIMARY="0.5", TEAM="0.5"),
        ],
        owner=OWNER,
    )


SPLITS = [
    (1, 150),
    (99, 101),
    (100, 250),
    (150, 1000),
    (299, 300),
    (300, 441),
    (440, 2000),
]


# ============================================================
# 1. 可加性：拆分区间不改变总量
# ============================================================
@pytest.mark.parametrize("pool", [Pool.PRIMARY, Pool.BONUS, Pool.NOMINEX])
@pytest.mark.parametrize("t2,t3", SPLITS)
def test_split_interval_mints_same_total(decaying_definition, pool, t2, t3):
    supply = Decimal("1000000.123456789")

    whole_state = ProgressState.start(pool, supply)
    whole = advance(decaying_definition, whole_state, t3)

    split_state = ProgressState.start(pool, supply)
    first = advance(decaying_definition, split_state, t2)
    second = advance(decaying_definition, split_state, t3)

    assert add(first, second) == whole
    assert split_state == whole_state


def test_second_by_second_equals_single_call(decaying_definition):
    supply = Decimal("987654.321")
    one_shot = ProgressState.start(Pool.PRIMARY, supply)
    stepped = ProgressState.start(Pool.PRIMARY, supply)

    total = advance(decaying_definition, one_shot, 700)

    acc = Decimal(0)
    for t in range(1, 701):
        acc = add(acc, advance(decaying_definition, stepped, t))

    assert acc == total
    assert stepped == one_shot


# ============================================================
# 2. state 单调
# ============================================================
def test_state_is_monotonic(decaying_definition):
    state = ProgressState.start(Pool.TEAM, Decimal(1000))
    prev = state.copy()

    for target in [5, 5, 3, 100, 170, 171, 240, 239, 310, 400, 10_000]:
        minted = advance(decaying_definition, state, target)

        assert minted >= 0
        assert state.time >= prev.time
        assert state.phase_index >= prev.phase_index
        assert state.cycle_start_time >= prev.cycle_start_time
        assert state.cycle_start_time <= state.time
        assert state.next_tick_supply <= prev.next_tick_supply

        prev = state.copy()


def test_cycle_index_resets_on_each_phase_transition(decaying_definition):
    state = ProgressState.start(Pool.PRIMARY, Decimal(1000))
    seen = []

    for target in range(10, 600, 10):
        before = state.phase_index
        advance(decaying_definition, state, target)
        if state.phase_index != before:
            seen.append((state.phase_index, state.cycle_index, state.cycle_start_time))

    # phase 0: 3 * 100s, phase 1: 2 * 70s
    assert seen == [(1, 0, 300), (2, 0, 440)]


def test_decay_count_matches_completed_cycles(decaying_definition):
    state = ProgressState.start(Pool.PRIMARY, Decimal(1000))
    advance(decaying_definition, state, 250)

    assert state.cycle_index == 2
    assert state.next_tick_supply == Decimal("988.036")
