"""
CLI Main Entry Point for Agent Alpha.

Provides command-line interface using Click.
"""

import json
from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from agentalpha import __version__


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False),
              help="Settings YAML file")
@click.option("--log-level", default=None, help="Override log level (DEBUG, INFO, ...)")
@click.pass_context
def cli(ctx, config_path, log_level):
    """Agent Alpha - Multi-Strategy Trading Signal Engine."""
    from agentalpha.config import Settings, get_settings, setup_logging

    settings = Settings.from_yaml(config_path) if config_path else get_settings()
    settings = settings.model_copy(deep=True)
    if log_level:
        settings.logging.level = log_level.upper()
    setup_logging(settings.logging)

    ctx.obj = settings


# ============ Strategy Commands ============

@cli.group()
def strategies():
    """Strategy discovery commands."""
    pass


@strategies.command("list")
@click.option("--category", "-c", default=None, help="Filter by category")
def list_strategy_specs(category):
    """List registered strategies."""
    from agentalpha.strategies import get_strategy, list_strategies

    codes = list_strategies(category)
    if not codes:
        click.echo("No strategies found.")
        return

    console = Console()
    table = Table(title="Strategies")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Entry")
    table.add_column("Exit")
    table.add_column("Size x", justify="right")

    for code in codes:
        spec = get_strategy(code).spec
        table.add_row(
            spec.code,
            spec.name,
            spec.category,
            " or ".join(t.describe() for t in spec.entry),
            " or ".join(t.describe() for t in spec.exit),
            f"{spec.size_multiplier:g}",
        )

    console.print(table)


@strategies.command("show")
@click.argument("code")
def show_strategy(code):
    """Show one strategy's parameters."""
    from agentalpha.strategies import get_strategy

    strategy = get_strategy(code)
    if strategy is None:
        raise click.ClickException(f"Strategy '{code}' not found.")

    for key, value in strategy.to_dict().items():
        if isinstance(value, list):
            value = " or ".join(value)
        click.echo(f"{key}: {value}")


# ============ Signal Commands ============

@cli.group()
def signals():
    """Signal generation commands."""
    pass


@signals.command("evaluate")
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False))
@click.option("--strategy", "-S", default=None, help="Strategy code (e.g., 'momentum')")
@click.option("--agent", "-a", default=None, help="Agent name (default: 'cli')")
@click.option("--balance", "-b", default=None, type=float, help="Override the snapshot balance")
@click.option("--max-position", "-m", default=None, type=float,
              help="Max position size in percent of balance")
@click.option("--risk", "-r", default=None, type=click.Choice(["low", "medium", "high"]),
              help="Risk tolerance")
@click.option("--pairs", "-p", default=None, help="Comma-separated tradable symbols")
@click.option("--validate/--no-validate", default=True, help="Apply risk limits to signals")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def evaluate_signals(ctx, snapshot, strategy, agent, balance, max_position, risk, pairs,
                     validate, as_json):
    """
    Evaluate a strategy against a snapshot file (YAML, JSON or CSV).

    With --config, the file's agent section seeds the agent profile and
    the options given here override it.
    """
    from agentalpha.data import AccountSnapshot, SnapshotLoader
    from agentalpha.engine import AgentProfile, TradingCycle
    from agentalpha.signals import SignalValidator

    loader = SnapshotLoader()
    path = Path(snapshot)

    try:
        if path.suffix.lower() == ".csv":
            account = AccountSnapshot(market_data=loader.load_csv(path))
        else:
            account = loader.load(path)
    except (ValueError, yaml.YAMLError) as e:
        raise click.BadParameter(str(e), param_hint="SNAPSHOT")

    if balance is not None:
        account.balance = balance

    settings = ctx.obj
    config_path = ctx.find_root().params.get("config_path")
    pair_list = pairs.split(",") if pairs else None

    try:
        fields = {"name": "cli"}
        if config_path:
            fields.update(AgentProfile.from_yaml(config_path).model_dump(exclude_unset=True))
        overrides = {
            "name": agent,
            "strategy_type": strategy,
            "risk_tolerance": risk,
            "max_position_size_percent": max_position,
            "trading_pairs": pair_list,
        }
        fields.update({k: v for k, v in overrides.items() if v is not None})
        profile = AgentProfile.from_settings(settings, **fields)
    except ValidationError as e:
        raise click.ClickException(f"Invalid agent configuration: {e}")

    validator = SignalValidator.from_config(settings.risk) if validate else None
    cycle = TradingCycle(profile, validator=validator)
    result = cycle.run(account.balance, account.positions, account.market_data)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(result.summary())
    if result.signals:
        console = Console()
        table = Table(title=f"Signals - {cycle.strategy.name}")
        table.add_column("Action", style="bold")
        table.add_column("Symbol", style="cyan")
        table.add_column("Confidence", justify="right")
        table.add_column("Quantity", justify="right")
        table.add_column("Reason")
        for signal in result.signals:
            table.add_row(
                signal.action.value,
                signal.symbol,
                f"{signal.confidence:.2f}",
                f"{signal.quantity:.8g}",
                signal.reason,
            )
        console.print(table)
    else:
        click.echo("No signals: holding all positions.")

    for signal, reason in result.rejected:
        click.echo(f"  rejected {signal.action.value} {signal.symbol}: {reason}")
    for symbol in result.skipped:
        click.echo(f"  skipped {symbol}: non-positive price")


if __name__ == "__main__":
    cli()
