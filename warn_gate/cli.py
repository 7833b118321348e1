"""CLI entrypoint for warn-gate."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from warn_gate import __version__
from warn_gate.conditions import (
    ConditionRule,
    build_conditions,
    check_field,
    get_condition_spec,
    list_condition_info,
)
from warn_gate.config import AppConfig, default_config_template, load_app_config
from warn_gate.evaluator import evaluate_conditions
from warn_gate.output import render_human, render_json
from warn_gate.snapshot import Snapshot, load_snapshot
from warn_gate.tiers import Tier

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="warn-gate",
    no_args_is_help=True,
    help="Gate builds on static-analysis warning count regressions.",
)


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug details to stderr."),
    ] = False,
) -> None:
    """Root command callback."""
    _ = version
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


@app.command("evaluate")
def evaluate_command(
    current: Annotated[
        Path | None, typer.Option(help="JSON snapshot of the current build.")
    ] = None,
    previous: Annotated[
        Path | None, typer.Option(help="JSON snapshot of the previous build.")
    ] = None,
    current_count: Annotated[
        int | None, typer.Option("--current-count", min=0, help="Current warning count.")
    ] = None,
    previous_count: Annotated[
        int | None, typer.Option("--previous-count", min=0, help="Previous warning count.")
    ] = None,
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[
        str | None, typer.Option(help="Output format: human|json.", show_default="human")
    ] = None,
    fail_on: Annotated[
        str | None,
        typer.Option("--fail-on", help="Exit nonzero if the result is at or above this tier."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Evaluate configured conditions against current and previous snapshots."""
    app_config = _load_config_or_raise(repo, config_file)
    output_format = (format or app_config.format).lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    fail_tier = _resolve_fail_tier(fail_on or app_config.fail_on, app_config)
    current_snapshot = _resolve_snapshot(current, current_count, side="current")
    previous_snapshot = _resolve_snapshot(previous, previous_count, side="previous")
    rules = _build_configured_conditions_or_raise(app_config)

    evaluation = evaluate_conditions(
        rules,
        current_snapshot,
        previous_snapshot,
        tiers=app_config.results,
    )

    if output_format == "json":
        typer.echo(
            render_json(
                evaluation,
                current=current_snapshot,
                previous=previous_snapshot,
                config_source=app_config.source,
            )
        )
    else:
        typer.echo(
            render_human(
                evaluation,
                tiers=app_config.results,
                current=current_snapshot,
                previous=previous_snapshot,
            )
        )

    if fail_tier is not None and evaluation.result >= fail_tier:
        raise typer.Exit(code=1)


@app.command("conditions")
def conditions_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """List available condition types."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    app_config = _load_config_or_raise(repo, config_file)
    configured = {rule.condition_id for rule in _build_configured_conditions_or_raise(app_config)}
    info = list_condition_info()

    if output_format == "json":
        payload = {
            "conditions": [
                {
                    "condition_id": item.condition_id,
                    "name": item.name,
                    "description": item.description,
                    "parameters": list(item.parameters),
                    "configured": item.condition_id in configured,
                }
                for item in info
            ],
            "meta": {"config_source": app_config.source},
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Available conditions:"]
    for item in info:
        status = "configured" if item.condition_id in configured else "available"
        lines.append(f"- {item.condition_id} [{status}] - {item.name}: {item.description}")
        lines.append(f"  parameters: {', '.join(item.parameters)}")
    typer.echo("\n".join(lines))


@app.command("check")
def check_command(
    condition_id: Annotated[str, typer.Argument(help="Condition id.")],
    field: Annotated[str, typer.Argument(help="Parameter name.")],
    value: Annotated[str, typer.Argument(help="Raw parameter value.")],
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Validate a single condition parameter value."""
    app_config = _load_config_or_raise(repo, config_file)
    try:
        get_condition_spec(condition_id)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="condition_id") from exc

    error = check_field(condition_id, field, value, app_config.results)
    if error is not None:
        typer.echo(f"{field}: {error}")
        raise typer.Exit(code=1)
    typer.echo(f"{field}: OK")


@app.command("config")
def config_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Show resolved configuration."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    app_config = _load_config_or_raise(repo, config_file)
    _build_configured_conditions_or_raise(app_config)
    payload = app_config.to_dict()

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- format: {payload['format']}",
        f"- fail_on: {payload['fail_on']}",
        f"- results: {', '.join(payload['results']['order'])}",
        f"- results.ok: {payload['results']['ok']}",
        f"- results.default_warranted: {payload['results']['default_warranted']}",
    ]
    for item in payload["conditions"]:
        lines.append(f"- condition: {item}")
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".warn-gate.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter repository config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


@app.command("config-validate")
def config_validate_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    config_file: Annotated[
        Path,
        typer.Option("--config", help="Path to config TOML file to validate."),
    ] = Path(".warn-gate.toml"),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """Validate a config file and report configured conditions."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    app_config = _load_config_or_raise(repo, config_file)
    rules = _build_configured_conditions_or_raise(app_config)
    payload = {
        "ok": True,
        "source": app_config.source,
        "condition_ids": [rule.condition_id for rule in rules],
    }
    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return
    typer.echo(
        "\n".join(
            [
                "Config is valid.",
                f"- source: {payload['source']}",
                f"- condition_ids: {payload['condition_ids']}",
            ]
        )
    )


def main() -> None:
    """Console script entrypoint."""
    app()


def _load_config_or_raise(repo: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(repo, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _build_configured_conditions_or_raise(app_config: AppConfig) -> list[ConditionRule]:
    try:
        return build_conditions(app_config.conditions, app_config.results)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.conditions") from exc


def _resolve_fail_tier(name: str | None, app_config: AppConfig) -> Tier | None:
    if name is None:
        return None
    try:
        return app_config.results.tier(name)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--fail-on") from exc


def _resolve_snapshot(path: Path | None, count: int | None, *, side: str) -> Snapshot | None:
    if path is not None and count is not None:
        raise typer.BadParameter(f"Use either --{side} or --{side}-count, not both.")
    if count is not None:
        return Snapshot(warning_count=count)
    if path is None:
        logger.debug("No %s snapshot provided", side)
        return None
    try:
        return load_snapshot(path)
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint=f"--{side}") from exc
