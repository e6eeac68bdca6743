"""oasdocs CLI -- validate, bundle and upload OpenAPI specifications.

Thin wrapper around :mod:`oasdocs.pipeline` using click.
Each command runs one workflow, echoes its diagnostics (stdout for
progress and success, stderr for failures) and exits with its code.
"""

from __future__ import annotations

from pathlib import Path

import click

from oasdocs import pipeline
from oasdocs.config import CLIConfig
from oasdocs.types import EXIT_FAILURE, Command, Result


EXAMPLES = """\b
Examples:
  oasdocs validate ./docs/api.yml
      Validate an OpenAPI specification
  oasdocs bundle ./docs/api.yml --output ./output/bundled.json
      Bundle and save specification
  oasdocs upload ./docs/api.yml
      Upload specification (stub)
"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class SpecCLIGroup(click.Group):
    """Command group that reports every usage error with exit status 1."""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as exc:
            exc.exit_code = EXIT_FAILURE
            raise

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except click.UsageError as exc:
            exc.exit_code = EXIT_FAILURE
            raise


def _finish(ctx: click.Context, result: Result) -> None:
    """Echo a workflow's diagnostics and exit with its code."""
    for diag in result.diagnostics:
        click.echo(diag.text, err=diag.err)
    ctx.exit(result.exit_code)


_file_argument = click.argument(
    "file", type=click.Path(dir_okay=False, path_type=Path)
)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group(
    cls=SpecCLIGroup,
    epilog=EXAMPLES,
    no_args_is_help=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(package_name="oasdocs")
@click.option(
    "--color/--no-color",
    default=None,
    help="Force colored output on or off (default: auto-detect).",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(ctx: click.Context, color: bool | None, verbose: bool) -> None:
    """oasdocs -- OpenAPI specification maintenance tool."""
    config = CLIConfig(color=color, verbose=verbose)
    config.configure_logging()
    ctx.color = config.color
    ctx.obj = config


# ---------------------------------------------------------------------------
# oasdocs validate
# ---------------------------------------------------------------------------


@cli.command(Command.VALIDATE.value)
@_file_argument
@click.pass_context
def validate(ctx: click.Context, file: Path) -> None:
    """Validate an OpenAPI specification file."""
    _finish(ctx, pipeline.run_validate(file))


# ---------------------------------------------------------------------------
# oasdocs bundle
# ---------------------------------------------------------------------------


@cli.command(Command.BUNDLE.value)
@_file_argument
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file path for bundled specification.",
)
@click.pass_context
def bundle(ctx: click.Context, file: Path, output: Path) -> None:
    """Bundle an OpenAPI specification and save to file."""
    config: CLIConfig = ctx.obj
    _finish(ctx, pipeline.run_bundle(file, output, indent=config.indent))


# ---------------------------------------------------------------------------
# oasdocs upload
# ---------------------------------------------------------------------------


@cli.command(Command.UPLOAD.value)
@_file_argument
@click.pass_context
def upload(ctx: click.Context, file: Path) -> None:
    """Upload specification (not yet implemented)."""
    _finish(ctx, pipeline.run_upload(file))


def main() -> None:
    cli(prog_name="oasdocs")


if __name__ == "__main__":
    main()
