"""
CLI commands for generation.

Thin wrappers over ``templategen.core.use_cases.generate``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


@click.command("generate")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--dry-run", is_flag=True, help="Report stale outputs without writing.")
@click.pass_context
def generate(ctx: click.Context, as_json: bool, dry_run: bool) -> None:
    """Render every stale output under the generator directory."""
    from templategen.core.use_cases.generate import run_generate

    registered: list[tuple[Path, str]] = []

    def _register(path: Path, scope: str) -> None:
        registered.append((path, scope))

    result = run_generate(
        config_path=ctx.obj.get("config_path"),
        dry_run=dry_run,
        register_source_root=_register,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.config is not None
    quiet = ctx.obj.get("quiet", False)
    verbose = ctx.obj.get("verbose", False)

    mode_label = "[dry-run] " if dry_run else ""
    if not quiet:
        click.secho(f"\n⚙️  {mode_label}{result.config.name}", fg="cyan", bold=True)

    for outcome in result.outcomes:
        if outcome.status == "generated":
            click.secho("   ✓ ", fg="green", nl=False)
            click.echo(outcome.output)
        elif outcome.status == "stale":
            click.secho("   ⟳ ", fg="yellow", nl=False)
            click.echo(f"{outcome.output} (stale)")
        elif verbose:
            click.secho("   ⊘ ", fg="white", nl=False)
            click.echo(f"{outcome.output} (up to date)")

    if not quiet:
        click.echo()
        summary = f"   {result.generated} generated, {result.skipped} up to date"
        if dry_run:
            summary = f"   {result.stale} stale, {result.skipped} up to date"
        click.secho(summary, fg="green", bold=True)
        for path, scope in registered:
            click.echo(f"   📦 Source root ({scope}): {path}")
        click.echo()


@click.command("providers")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def providers(as_json: bool) -> None:
    """List the registered descriptor providers."""
    from templategen.core.providers.registry import default_registry

    # Directories don't matter for listing
    registry = default_registry(Path("."), Path("."), Path("."))
    entries = registry.describe()

    if as_json:
        click.echo(json.dumps(entries, indent=2))
        return

    click.secho("🔌 Descriptor providers:", fg="cyan", bold=True)
    for entry in entries:
        click.echo(f"   {entry['extension']:<8} {entry['provider']}  ({entry['type']})")
