from decimal import Decimal, localcontext

import pytest

from mint_schedule.schedule import Pool, ProgressState
from mint_schedule.schedule.numeric import decay, per_second, to_decimal, truncate
from mint_schedule.utils.errors import InvalidState, UnmappedPool


# ============================================================
# ProgressState
# ============================================================
def test_start_state():
    s = ProgressState.start(Pool.BONUS, "1000", start_time=1_700_000_000)

    assert s.pool is Pool.BONUS
    assert s.time == s.cycle_start_time == 1_700_000_000
    assert s.phase_index == 0
    assert s.cycle_index == 0
    assert s.next_tick_supply == Decimal(1000)


def test_copy_is_independent():
    s = ProgressState.start(Pool.PRIMARY, 10)
    c = s.copy()
    c.time = 99

    assert s.time == 0
    assert c != s


def test_dict_roundtrip_keeps_precision():
    s = ProgressState(
        pool=Pool.NOMINEX,
        time=1234,
        phase_index=3,
        cycle_index=7,
        cycle_start_time=1200,
        next_tick_supply=Decimal("988036.000000000000000001"),
    )
    d = s.to_dict()

    assert d["pool"] == "NOMINEX"
    assert d["next_tick_supply"] == "988036.000000000000000001"
    assert ProgressState.from_dict(d) == s


def test_pool_from_name():
    s = ProgressState(pool="team")
    assert s.pool is Pool.TEAM


@pytest.mark.parametrize(
    "supply", [-10, "-0.000000000000000001", "NaN", "Infinity", float("nan"), "ten"]
)
def test_invalid_supply_rejected(supply):
    with pytest.raises(InvalidState):
        ProgressState.start(Pool.PRIMARY, supply)


def test_negative_index_rejected():
    with pytest.raises(InvalidState):
        ProgressState(pool=Pool.PRIMARY, phase_index=-1)
    with pytest.raises(InvalidState):
        ProgressState(pool=Pool.PRIMARY, cycle_index=-1)


def test_from_dict_validates_supply():
    d = ProgressState.start(Pool.PRIMARY, 10).to_dict()
    d["next_tick_supply"] = "-10"

    with pytest.raises(InvalidState):
        ProgressState.from_dict(d)


# ============================================================
# Pool
# ============================================================
@pytest.mark.parametrize("name", ["primary", "PRIMARY", " Primary ", Pool.PRIMARY])
def test_pool_parse(name):
    assert Pool.parse(name) is Pool.PRIMARY


def test_pool_parse_unknown():
    with pytest.raises(UnmappedPool):
        Pool.parse("treasury")


# ============================================================
# numeric
# ============================================================
def test_float_goes_through_repr():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(0.994) == Decimal("0.994")


def test_bool_rejected():
    with pytest.raises(TypeError):
        to_decimal(True)


def test_truncate_toward_zero():
    assert truncate(Decimal("1.9999999999999999999")) == Decimal("1.999999999999999999")
    assert truncate(Decimal("-1.9999999999999999999")) == Decimal("-1.999999999999999999")


def test_decay_and_per_second_ignore_thread_context():
    with localcontext() as ctx:
        ctx.prec = 3
        assert decay(Decimal("1000000"), Decimal("0.994")) == Decimal("994000")
        assert per_second(Decimal("1000000"), Decimal("0.5"), Decimal("0.098")) == Decimal("49000")
