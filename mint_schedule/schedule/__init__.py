from .pool import Pool
from .definition import PhaseDescriptor, ScheduleDefinition
from .state import ProgressState
from .engine import ScheduleEngine, advance, persist_state_change

__all__ = [
    "Pool",
    "PhaseDescriptor", "ScheduleDefinition",
    "ProgressState",
    "ScheduleEngine", "advance", "persist_state_change",
]
