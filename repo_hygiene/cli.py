"""CLI entrypoint for repo-hygiene."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from repo_hygiene import __version__
from repo_hygiene.config import AppConfig, default_config_template, load_app_config
from repo_hygiene.output import EXIT_COLLECTION_ERROR, run_check
from repo_hygiene.rules import build_rules, list_rule_info
from repo_hygiene.rules.base import Rule
from repo_hygiene.snapshot import CollectionError, collect_snapshot

logger = logging.getLogger("repo_hygiene.cli")

app = typer.Typer(
    name="repo-hygiene",
    no_args_is_help=True,
    help="Check project file layout and commit message hygiene.",
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


@app.command("check")
def check_command(
    path: Annotated[
        Path, typer.Option("--path", help="Project directory.", readable=False)
    ] = Path("."),
    format: Annotated[
        str | None, typer.Option(help="Output format: human|json.", show_default="human")
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Check the project and exit nonzero on violations."""
    app_config = _load_config_or_raise(path, config_file)
    output_format = (format or app_config.format).lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    rules = _build_configured_rules_or_raise(app_config)
    logger.debug("Active rules: %s", ", ".join(rule.rule_id for rule in rules))

    try:
        snapshot = collect_snapshot(path, exclude=app_config.exclude)
    except CollectionError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=EXIT_COLLECTION_ERROR) from exc

    exit_code = run_check(snapshot, rules, output_format=output_format)
    if exit_code:
        raise typer.Exit(code=exit_code)


@app.command("rules")
def rules_command(
    path: Annotated[Path, typer.Option("--path", help="Project directory.")] = Path("."),
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """List available rules and whether they are enabled."""
    app_config = _load_config_or_raise(path, config_file)
    active_ids = {rule.rule_id for rule in _build_configured_rules_or_raise(app_config)}

    lines = ["Available rules:"]
    for item in list_rule_info():
        status = "enabled" if item.rule_id in active_ids else "disabled"
        lines.append(f"- {item.rule_id} [{status}] ({item.category}) - {item.description}")
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".repo-hygiene.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter project config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


def main() -> None:
    """Console script entrypoint."""
    app()


def _load_config_or_raise(path: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(path, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _build_configured_rules_or_raise(app_config: AppConfig) -> list[Rule]:
    try:
        return build_rules(
            enabled_rule_ids=app_config.rule_enable,
            disabled_rule_ids=app_config.rule_disable,
            config=app_config,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.rules") from exc
