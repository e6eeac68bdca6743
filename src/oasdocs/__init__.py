"""oasdocs -- OpenAPI specification maintenance tool.

Top-level convenience re-exports::

    from oasdocs import validate, bundle
    from oasdocs.pipeline import run_bundle  # full workflows
"""

__version__ = "1.0.0"

from oasdocs.bundler import bundle, dump_bundle
from oasdocs.errors import BundleError, OASDocsError, OutputWriteError, SpecReadError
from oasdocs.fsutil import ensure_directory_exists
from oasdocs.types import ValidationError, ValidationOutcome
from oasdocs.validator import validate

__all__ = [
    "__version__",
    "bundle",
    "dump_bundle",
    "ensure_directory_exists",
    "validate",
    "BundleError",
    "OASDocsError",
    "OutputWriteError",
    "SpecReadError",
    "ValidationError",
    "ValidationOutcome",
]
