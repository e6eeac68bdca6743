"""Render validation failures as console text.

Two renderers: :func:`render_stylish` groups every error under the file
name in aligned, colored columns; :func:`render_plain` prints one bullet
per error and only ever touches ``message`` and ``location``.
:func:`render_errors` tries the first and falls back to the second.

Colors are embedded with :func:`click.style`; ``click.echo`` strips them
when the output is not a terminal or ``--no-color`` is given.
"""

from __future__ import annotations

import logging

import click

from oasdocs.types import ValidationOutcome

logger = logging.getLogger(__name__)

_BULLET = "•"
_CROSS = "✖"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def render_stylish(outcome: ValidationOutcome) -> str:
    """Errors grouped under the file path, one aligned row per error."""
    errors = list(outcome.errors)
    locations = [err.location or "" for err in errors]
    width = max(len(loc) for loc in locations) if locations else 0

    lines = [click.style(str(outcome.path), underline=True)]
    for err, loc in zip(errors, locations):
        lines.append(
            "  "
            + click.style(loc.ljust(width), dim=True)
            + "  "
            + click.style("error", fg="red")
            + "  "
            + err.message
        )
    lines.append("")
    lines.append(
        click.style(f"{_CROSS} {_plural(len(errors), 'problem')}", fg="red", bold=True)
    )
    return "\n".join(lines)


def render_plain(outcome: object) -> str:
    """Minimal rendering that cannot raise."""
    errors = getattr(outcome, "errors", None)
    if not isinstance(errors, (list, tuple)):
        errors = ()
    lines = []
    for err in errors:
        message = getattr(err, "message", None)
        lines.append(click.style(f"  {_BULLET} {message if message is not None else err}", fg="red"))
        location = getattr(err, "location", None)
        if location:
            lines.append(click.style(f"    at {location}", fg="bright_black"))
    return "\n".join(lines)


def render_errors(outcome: ValidationOutcome) -> str:
    try:
        return render_stylish(outcome)
    except Exception:
        logger.debug("Stylish rendering failed, using plain output", exc_info=True)
        return render_plain(outcome)
