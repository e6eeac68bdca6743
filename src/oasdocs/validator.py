"""Validator adapter around openapi-spec-validator.

Turns a specification file into a :class:`ValidationOutcome`.  Schema
violations become entries in the outcome; anything that prevents the
document from being checked at all (missing file, YAML syntax error,
unresolvable ``$ref``) is raised as :class:`SpecReadError`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from openapi_spec_validator import (
    OpenAPIV2SpecValidator,
    OpenAPIV30SpecValidator,
    OpenAPIV31SpecValidator,
)
from openapi_spec_validator.readers import read_from_filename

from oasdocs.errors import SpecReadError
from oasdocs.types import ValidationError, ValidationOutcome

logger = logging.getLogger(__name__)


def _escape_pointer_token(token: object) -> str:
    # JSON Pointer escaping per RFC 6901
    return str(token).replace("~", "~0").replace("/", "~1")


def format_location(path: Iterable[object]) -> str | None:
    """Render a validator error path as a JSON pointer, or ``None`` if empty."""
    tokens = [_escape_pointer_token(t) for t in path]
    if not tokens:
        return None
    return "#/" + "/".join(tokens)


def _select_validator(spec: Mapping):
    """Pick the validator class for the document's declared version.

    Returns ``(validator_cls, None)`` or ``(None, reason)``.
    """
    if "swagger" in spec:
        version = str(spec["swagger"])
        if version == "2.0":
            return OpenAPIV2SpecValidator, None
        return None, f"Unsupported Swagger version: {version}"

    if "openapi" not in spec:
        return None, (
            "Unable to detect the specification version: "
            "expected a top-level 'openapi' or 'swagger' field"
        )

    version = str(spec["openapi"])
    if version.startswith("3.0"):
        return OpenAPIV30SpecValidator, None
    if version.startswith("3.1"):
        return OpenAPIV31SpecValidator, None
    return None, f"Unsupported OpenAPI version: {version}"


def _read(path: str):
    try:
        spec, base_uri = read_from_filename(path)
    except Exception as exc:
        raise SpecReadError(str(exc) or exc.__class__.__name__) from exc

    if not isinstance(spec, Mapping):
        raise SpecReadError(
            f"Expected a mapping at the document root, got {type(spec).__name__}"
        )
    return spec, base_uri


def validate(path: Path | str) -> ValidationOutcome:
    """Validate the specification at *path* against the OpenAPI schema.

    References to other files are followed relative to *path*.  Raises
    :class:`SpecReadError` if the file cannot be read or checked.
    """
    path = str(path)
    spec, base_uri = _read(path)

    validator_cls, reason = _select_validator(spec)
    if validator_cls is None:
        logger.debug("No validator for %s: %s", path, reason)
        return ValidationOutcome.from_errors(path, [ValidationError(reason)])

    logger.debug("Validating %s with %s", base_uri, validator_cls.__name__)
    try:
        errors = [
            ValidationError(
                message=err.message,
                location=format_location(err.absolute_path),
            )
            for err in validator_cls(spec, base_uri=base_uri).iter_errors()
        ]
    except Exception as exc:
        raise SpecReadError(str(exc) or exc.__class__.__name__) from exc

    logger.debug("%s: %d validation error(s)", path, len(errors))
    return ValidationOutcome.from_errors(path, errors)
