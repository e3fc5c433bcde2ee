from .app_config import AppConfig
from .log_config import LogConfig
from .schedule_config import PhaseConfig, ScheduleConfig

__all__ = ["AppConfig", "LogConfig", "PhaseConfig", "ScheduleConfig"]
