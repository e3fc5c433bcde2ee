#!filepath: mint_schedule/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from .log_config import LogConfig
from .schedule_config import ScheduleConfig

DEFAULT_OWNER = "owner"


def project_root() -> str:
    """
    返回项目根目录（基于当前文件位置推导）:
    mint_schedule/config/app_config.py → mint_schedule/config → mint_schedule → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = LogConfig()
    schedule: ScheduleConfig
    owner: str = DEFAULT_OWNER

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用包内 mint_schedule/config/base.yml
        - owner 只从环境变量 SCHEDULE_OWNER 注入，不写进 YAML
        """
        load_dotenv(os.path.join(project_root(), ".env"))

        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        raw["owner"] = os.getenv("SCHEDULE_OWNER", DEFAULT_OWNER)
        return cls(**raw)

    def build_definition(self):
        return self.schedule.to_definition(owner=self.owner)
