"""Exception hierarchy for moinexport.

Store failures (``NotFound``, ``RevisionUnavailable``) are user-facing and
propagate to the caller unchanged. ``MalformedAttributeRun`` signals a broken
invariant in the attribute encoding and is not meant to be recovered from.
"""


class MoinExportError(Exception):
    """Base exception for all moinexport errors."""


class NotFound(MoinExportError):
    """Raised when a document id is unknown to the store."""


class RevisionUnavailable(MoinExportError):
    """Raised when a requested revision cannot be reconstructed."""


class MalformedAttributeRun(MoinExportError, ValueError):
    """Raised when an attribute-run encoding is ill-formed or read past its end."""
