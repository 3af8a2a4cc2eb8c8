"""Command-line interface for licensekit.

Provides CLI commands for inspecting and running the license tasks of a
build described in YAML.
"""

import logging
import sys
from pathlib import Path
from typing import Tuple

import click
import yaml

from .. import __version__
from ..exceptions import LicenseKitError


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Setup logging for CLI commands."""
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    return logging.getLogger("licensekit")


def _load(ctx: click.Context):
    from licensekit.config import load_project

    build_file = ctx.obj["build_file"]
    ctx.obj["logger"].info(f"Loading build description: {build_file}")
    try:
        return load_project(build_file)
    except (LicenseKitError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="licensekit")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.option("--build", "-b", "build_file", default="build.yaml", show_default=True,
              type=click.Path(), help="Build description file (YAML)")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool, build_file: str) -> None:
    """licensekit: License header checks and dependency license reports.

    Examples:

        # List license tasks synthesized for the build
        licensekit tasks

        # Show the resolved license and report configuration
        licensekit config

        # Check headers as part of the standard verification
        licensekit run check
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["build_file"] = build_file
    ctx.obj["logger"] = setup_logging(verbose, debug)


@cli.command()
@click.option("--all", "show_all", is_flag=True, help="Include tasks without a group")
@click.pass_context
def tasks(ctx: click.Context, show_all: bool) -> None:
    """List tasks by group, with their dependencies."""
    project = _load(ctx)

    groups = {}
    for task in project.tasks:
        if task.group is None and not show_all:
            continue
        groups.setdefault(task.group or "Other", []).append(task)

    for group in sorted(groups):
        click.echo(f"{group} tasks")
        click.echo("-" * (len(group) + 6))
        for task in groups[group]:
            line = task.name
            if task.description:
                line += f" - {task.description}"
            click.echo(line)
            if task.dependencies:
                click.echo(f"    depends on: {', '.join(task.dependencies)}")
        click.echo("")


@cli.command()
@click.option("--task", "task_name", help="Show the resolved properties of one task instead")
@click.pass_context
def config(ctx: click.Context, task_name: str) -> None:
    """Dump resolved configuration as YAML."""
    from licensekit.config import DOWNLOAD_LICENSES, LICENSE

    project = _load(ctx)

    if task_name:
        try:
            task = project.tasks[task_name]
        except LicenseKitError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        data = {"task": task.to_dict(), "properties": task.convention_values()}
    else:
        data = {
            LICENSE: project.extensions[LICENSE].to_dict(),
            DOWNLOAD_LICENSES: project.extensions[DOWNLOAD_LICENSES].to_dict(),
        }

    click.echo(yaml.safe_dump(_plain(data), sort_keys=False).rstrip("\n"))


@cli.command()
@click.argument("task_names", nargs=-1, required=True)
@click.option("--dry-run", is_flag=True, help="Show execution plan without running")
@click.pass_context
def run(ctx: click.Context, task_names: Tuple[str, ...], dry_run: bool) -> None:
    """Run tasks and their dependencies."""
    from licensekit.pipeline import BuildLogger, TaskExecutor

    verbose = ctx.obj["verbose"]
    project = _load(ctx)

    log_dir = Path(project.build_dir) / "logs"
    build_logger = BuildLogger(str(log_dir), log_level="DEBUG" if verbose else "INFO")
    build_logger.setup()

    executor = TaskExecutor(project, build_logger)
    try:
        order = executor.run(list(task_names), dry_run=dry_run)
    except Exception as e:
        click.echo(f"Build failed: {e}", err=True)
        sys.exit(1)
    finally:
        build_logger.close()

    if dry_run:
        for name in order:
            click.echo(f"  :{name} SKIPPED")
    else:
        click.echo(f"Executed {len(executor.executed_tasks)} task(s)")


def _plain(value):
    """Convert paths, sets and license metadata to YAML-safe values."""
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted(_plain(v) for v in value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if hasattr(value, "to_dict"):
        return _plain(value.to_dict())
    return str(value)


def main() -> None:
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
