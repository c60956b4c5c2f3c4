"""
componentgen — CLI entrypoint.

Usage:
    componentgen --help
    componentgen generate [PATHS]...
    componentgen check [PATHS]...
    componentgen inspect [PATHS]...
    componentgen config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from componentgen import __version__
from componentgen.core.observability.logging_config import setup_logging

_PATHS = click.argument(
    "paths",
    nargs=-1,
    type=click.Path(exists=True, path_type=Path),
)


@click.group()
@click.version_option(version=__version__, prog_name="componentgen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Only report errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to componentgen.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: Path | None,
) -> None:
    """componentgen — generate cached component accessors."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("COMPONENTGEN_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("COMPONENTGEN_LOG_FILE"),
        log_file_level=os.environ.get("COMPONENTGEN_LOG_FILE_LEVEL"),
    )


def _echo_counts(errors: int, warnings: int) -> None:
    if errors:
        click.secho(f"   ❌ {errors} error(s), {warnings} warning(s)", fg="red")
    elif warnings:
        click.secho(f"   ⚠️  {warnings} warning(s)", fg="yellow")


@cli.command()
@_PATHS
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write all modules here instead of next to their sources.",
)
@click.option("--dry-run", is_flag=True, help="Show what would be written.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    paths: tuple[Path, ...],
    output_dir: Path | None,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Generate accessor modules for annotated components."""
    from componentgen.core.use_cases.generate import run_generate

    result = run_generate(
        config_path=ctx.obj.get("config_path"),
        paths=list(paths) or None,
        output_dir=output_dir,
        dry_run=dry_run,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    generation = result.generation
    output = result.output
    assert generation is not None and output is not None  # guaranteed after error check

    if not ctx.obj.get("quiet"):
        click.secho(f"🔧 {len(generation.containers)} annotated component(s)", fg="cyan", bold=True)
        written = {str(p) for p in output.written}
        pending = {str(p) for p in output.pending}
        for source in generation.sources:
            path = str(output.target_path(source))
            if path in written:
                marker = "✅ wrote"
            elif path in pending:
                marker = "📝 would write"
            else:
                marker = "✓ unchanged"
            click.echo(f"   {marker}  {path}  ← {source.container}")
        for name in generation.suppressed:
            click.secho(f"   ⛔ suppressed  {name}", fg="red")
        for path in output.removed:
            click.echo(f"   🗑  removed  {path}")
        for path in output.obsolete:
            click.echo(f"   🗑  would remove  {path}")

    for err in generation.write_errors:
        click.secho(f"   ❌ write failed: {err}", fg="red")

    _echo_counts(generation.error_count, generation.warning_count)

    if result.has_errors:
        sys.exit(1)


@cli.command()
@_PATHS
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Where generated modules live, if not next to their sources.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(
    ctx: click.Context,
    paths: tuple[Path, ...],
    output_dir: Path | None,
    as_json: bool,
) -> None:
    """Fail if annotations are invalid or generated modules are out of date."""
    from componentgen.core.use_cases.check import check_generated

    result = check_generated(
        config_path=ctx.obj.get("config_path"),
        paths=list(paths) or None,
        output_dir=output_dir,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.generation is not None  # guaranteed after error check

    for path in result.stale:
        click.secho(f"   📝 out of date: {path}", fg="yellow")
    for err in result.parse_errors:
        click.secho(f"   ⚠️  skipped: {err}", fg="yellow")
    _echo_counts(result.generation.error_count, result.generation.warning_count)

    if not result.ok:
        click.secho("❌ Check failed", fg="red", bold=True)
        sys.exit(1)

    click.secho("✅ Generated accessors are up to date", fg="green")


@cli.command("inspect")
@_PATHS
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def inspect_cmd(ctx: click.Context, paths: tuple[Path, ...], as_json: bool) -> None:
    """Show annotated components, their requirements and overrides."""
    from componentgen.core.use_cases.inspection import inspect_containers

    result = inspect_containers(
        config_path=ctx.obj.get("config_path"),
        paths=list(paths) or None,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.generation is not None  # guaranteed after error check

    if not result.generation.containers:
        click.secho("No annotated components found.", fg="yellow")
        return

    suppressed = set(result.generation.suppressed)
    for container in result.generation.containers:
        status = "suppressed" if container["full_name"] in suppressed else "ok"
        color = "red" if status == "suppressed" else "cyan"
        click.secho(f"📦 {container['full_name']} ({status})", fg=color, bold=True)
        click.echo(f"   {container['source']}:{container['line']}")
        defaults = container["defaults"]
        if defaults is not None:
            click.echo(f"   Defaults: {defaults['visibility']}")
        for type_name in container["required_types"]:
            click.echo(f"     • {type_name}")
        for type_name, entry in container["overrides"].items():
            click.echo(f"     • {type_name} → {entry['name']} ({entry['visibility']})")
        for diagnostic in container["diagnostics"]:
            click.secho(f"     ! {diagnostic['code']}: {diagnostic['message']}", fg="red")
    click.echo()


@cli.group()
def config() -> None:
    """Generator configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate componentgen.yml."""
    from componentgen.core.config.loader import ConfigError, find_config_file, load_config

    config_path = ctx.obj.get("config_path") or find_config_file()
    try:
        loaded = load_config(config_path, search=False)
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"valid": False, "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    data = {
        "valid": True,
        "config_path": str(config_path) if config_path else None,
        "root": str(loaded.root),
        **loaded.model_dump(mode="json"),
    }
    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.secho("✅ Configuration is valid", fg="green", bold=True)
    if config_path is None:
        click.echo("   (no componentgen.yml found, using defaults)")
    click.echo(f"   Sources: {', '.join(loaded.sources)}")
    click.echo(f"   Output:  {loaded.output_dir or 'next to sources'}")
    click.echo(f"   Runtime: {loaded.runtime_module}")


if __name__ == "__main__":
    cli()
