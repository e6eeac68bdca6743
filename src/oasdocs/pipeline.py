"""Validate, bundle and upload workflows.

Each ``run_*`` function performs one workflow end to end and returns a
:class:`Result` holding the exit code and every line to print.  Failures
are caught here and turned into diagnostics; nothing is raised to the
caller.  A document is never bundled or uploaded unless it validated.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from oasdocs import bundler, fsutil, validator
from oasdocs.errors import BundleError, OutputWriteError, SpecReadError
from oasdocs.reporter import render_errors
from oasdocs.types import DEFAULT_INDENT, Result

logger = logging.getLogger(__name__)


def _ok(text: str) -> str:
    return click.style(f"✓ {text}", fg="green")


def _fail(text: str) -> str:
    return click.style(text, fg="red")


def _check(file: str, result: Result) -> bool:
    """Validate *file*, recording failure diagnostics on *result*."""
    try:
        outcome = validator.validate(file)
    except SpecReadError as exc:
        logger.debug("Could not validate %s", file, exc_info=True)
        result.fail(_fail(f"Error validating {file}:") + f" {exc}")
        return False

    if outcome.valid:
        return True

    result.fail(_fail(f"✗ {file} is not valid"))
    result.err(render_errors(outcome))
    return False


def run_validate(file: Path | str) -> Result:
    file = str(file)
    result = Result()
    if _check(file, result):
        result.out(_ok(f"{file} is valid"))
    return result


def run_bundle(
    file: Path | str, output: Path | str, indent: int = DEFAULT_INDENT
) -> Result:
    """Validate *file*, inline its references and write JSON to *output*."""
    file, output = str(file), str(output)
    result = Result()

    result.out(click.style(f"Validating {file}...", fg="blue"))
    if not _check(file, result):
        return result.fail(_fail(f"Cannot bundle {file}: validation failed"))

    result.out(_ok(f"{file} is valid, proceeding with bundling..."))

    try:
        text = bundler.dump_bundle(bundler.bundle(file), indent=indent)
    except BundleError as exc:
        return result.fail(_fail(f"Error bundling {file}:") + f" {exc}")

    try:
        fsutil.write_text(output, text)
    except OutputWriteError as exc:
        return result.fail(_fail(f"Error writing {output}:") + f" {exc}")

    result.out(_ok(f"Bundled {file} and saved to {output}"))
    return result


def run_upload(file: Path | str) -> Result:
    """Validate *file*; uploading itself is not implemented yet."""
    file = str(file)
    result = Result()

    result.out(f"Validating {file}...")
    if not _check(file, result):
        return result.fail(f"Cannot upload {file}: validation failed")

    result.out(f"✓ {file} is valid")
    # TODO: send the bundled document once the docs host exposes an upload API
    result.out(f"Upload functionality for {file} is not yet implemented")
    return result
