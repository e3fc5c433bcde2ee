#!filepath: mint_schedule/observability/metrics.py
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict

from mint_schedule import logs
from mint_schedule.schedule.numeric import ZERO, add


@dataclass
class MetricRecorder:
    enabled: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any):
        if not self.enabled:
            return
        self.metrics[name] = value
        logs.info(f"[Metric] {name} = {value}")

    def add(self, name: str, amount: Decimal) -> Decimal:
        """
        累加型指标（如各 pool 的 minted 总量），返回累加后的值。
        """
        if not self.enabled:
            return ZERO
        total = add(self.metrics.get(name, ZERO), amount)
        self.metrics[name] = total
        logs.debug(f"[Metric] {name} += {amount} -> {total}")
        return total
