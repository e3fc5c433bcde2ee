from __future__ import annotations

from enum import Enum

from mint_schedule.utils.errors import UnmappedPool
# mint_schedule/schedule/pool.py


class Pool(str, Enum):
    """
    Destination buckets of minted emission.

    The set is fixed: every PhaseDescriptor must carry a share for each member.
    Pools are looked up by identity, never by ordinal.
    """

    DEFAULT_VALUE = "DEFAULT_VALUE"
    PRIMARY = "PRIMARY"
    BONUS = "BONUS"
    TEAM = "TEAM"
    NOMINEX = "NOMINEX"

    @classmethod
    def parse(cls, name: str | Pool) -> Pool:
        if isinstance(name, Pool):
            return name
        key = str(name).strip().upper()
        try:
            return cls[key]
        except KeyError:
            raise UnmappedPool(f"unknown pool: {name!r}") from None
