#!filepath: mint_schedule/cli.py
from decimal import Decimal, InvalidOperation
from typing import Optional

import typer
from rich import print
from rich.table import Table

from mint_schedule import AppConfig, __version__, init_logging, logs
from mint_schedule.observability.metrics import MetricRecorder
from mint_schedule.schedule import Pool, ProgressState, ScheduleEngine
from mint_schedule.utils.errors import ScheduleError, UserInputError

app = typer.Typer(help="Emission schedule CLI")

DAY = 24 * 60 * 60
WEEK = 7 * DAY


def _load(config: Optional[str], output_rate: Optional[str] = None):
    cfg = AppConfig.load(config)
    init_logging(cfg.log)

    definition = cfg.build_definition()
    if output_rate is not None:
        definition.set_output_rate(cfg.owner, _amount(output_rate, "output-rate"))
    return cfg, definition


def _amount(value: str, name: str) -> Decimal:
    try:
        d = Decimal(value)
    except InvalidOperation:
        raise UserInputError(f"--{name}: not a decimal number: {value!r}") from None
    if not d.is_finite():
        raise UserInputError(f"--{name}: must be finite, got {value!r}")
    return d


def _fail(e: Exception):
    print(f"[red]{type(e).__name__}: {e}[/red]")
    raise typer.Exit(code=1)


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def progress(
    pool: str,
    seconds: int,
    supply: Optional[str] = typer.Option(None, help="initial tick supply"),
    config: Optional[str] = typer.Option(None, help="YAML config path"),
):
    """
    从 t=0 推进一个 pool 的 state，输出 minted 数量和新 state
    """
    try:
        cfg, definition = _load(config)
        tick_supply = _amount(supply, "supply") if supply else cfg.schedule.initial_tick_supply
        state = ProgressState.start(Pool.parse(pool), tick_supply)

        minted = ScheduleEngine(definition).advance(state, seconds)
    except (ScheduleError, UserInputError) as e:
        _fail(e)

    print(f"[green]minted {state.pool.value}: {minted.normalize():f}[/green]")
    print(state.to_dict())


@app.command()
def simulate(
    weeks: int = typer.Option(52, help="simulated duration in weeks"),
    step_days: int = typer.Option(7, help="reporting step in days"),
    supply: Optional[str] = typer.Option(None, help="initial tick supply"),
    output_rate: Optional[str] = typer.Option(None, help="override output rate"),
    config: Optional[str] = typer.Option(None, help="YAML config path"),
):
    """
    按步长推进所有 pool，输出每步 minted 表格和总量
    """
    try:
        if weeks <= 0 or step_days <= 0:
            raise UserInputError("--weeks and --step-days must be positive")

        cfg, definition = _load(config, output_rate)
        tick_supply = _amount(supply, "supply") if supply else cfg.schedule.initial_tick_supply
        states = [ProgressState.start(pool, tick_supply) for pool in Pool]
    except (ScheduleError, UserInputError) as e:
        _fail(e)

    engine = ScheduleEngine(definition)
    metrics = MetricRecorder()

    table = Table(title=f"Emission over {weeks} weeks ({definition})")
    table.add_column("day", justify="right")
    table.add_column("phase", justify="right")
    for pool in Pool:
        table.add_column(pool.value, justify="right")

    end = weeks * WEEK
    step = step_days * DAY
    t = 0
    logs.info(f"[Simulate] weeks={weeks} step_days={step_days} supply={tick_supply}")

    while t < end:
        t = min(t + step, end)
        minted = engine.advance_pools(states, t)
        for pool, amount in minted.items():
            metrics.add(pool.value, amount)

        table.add_row(
            str(t // DAY),
            str(states[0].phase_index),
            *[f"{minted[pool]:.4f}" for pool in Pool],
        )

    print(table)

    for pool in Pool:
        total = metrics.metrics.get(pool.value, 0)
        print(f"total {pool.value}: {total:.4f}")

    metrics.record("final_phase", states[0].phase_index)
    metrics.record("exhausted", engine.is_exhausted(states[0]))
    print(f"final phase: {states[0].phase_index}/{len(definition)}")


if __name__ == "__main__":
    app()

# python -m mint_schedule.cli simulate --weeks 104
