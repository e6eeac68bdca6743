"""oasdocs exception hierarchy.

All tool-specific exceptions inherit from :class:`OASDocsError`.
"""

from __future__ import annotations


class OASDocsError(Exception):
    """Base exception for all oasdocs errors."""


class SpecReadError(OASDocsError):
    """Raised when a specification file cannot be read, parsed or validated at all."""


class BundleError(OASDocsError):
    """Raised when references cannot be resolved into a single document."""


class OutputWriteError(OASDocsError):
    """Raised when the bundled document cannot be written to disk."""
