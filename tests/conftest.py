# tests/conftest.py
from __future__ import annotations

from decimal import Decimal

import pytest
from loguru import logger

from mint_schedule.schedule import (
    PhaseDescriptor,
    Pool,
    ProgressState,
    ScheduleDefinition,
)

OWNER = "owner"


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


def make_shares(**overrides):
    """
    全 pool 为 0 的 share map，按名字覆盖：make_shares(PRIMARY="1")
    """
    shares = {pool: Decimal(0) for pool in Pool}
    for name, value in overrides.items():
        shares[Pool[name]] = Decimal(str(value))
    return shares


def make_phase(duration, count, multiplier, **shares) -> PhaseDescriptor:
    return PhaseDescriptor(
        cycle_duration_seconds=duration,
        cycles_count=count,
        cycle_completeness_multiplier=Decimal(str(multiplier)),
        pool_shares=make_shares(**shares),
    )


@pytest.fixture
def phase_factory():
    return make_phase


@pytest.fixture
def shares_factory():
    return make_shares


@pytest.fixture
def single_phase_definition() -> ScheduleDefinition:
    """
    100s cycles, 2 cycles, decay 0.5, PRIMARY takes everything.
    """
    return ScheduleDefinition(
        [make_phase(100, 2, "0.5", PRIMARY="1.0")],
        owner=OWNER,
    )


@pytest.fixture
def two_phase_definition() -> ScheduleDefinition:
    """
    phase 0: 100s x 2 cycles, decay 0.5
    phase 1: 50s cycles, terminal, decay 0.9
    """
    return ScheduleDefinition(
        [
            make_phase(100, 2, "0.5", PRIMARY="0.75", BONUS="0.25"),
            make_phase(50, 0, "0.9", PRIMARY="0.5", TEAM="0.5"),
        ],
        owner=OWNER,
    )


@pytest.fixture
def fresh_state() -> ProgressState:
    return ProgressState.start(Pool.PRIMARY, Decimal(10))
