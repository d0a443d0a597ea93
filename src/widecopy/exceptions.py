"""Error taxonomy surfaced by widecopy."""

from __future__ import annotations


class WidecopyError(RuntimeError):
    """Base class for failures that abort a widecopy run."""


class ResolutionFailure(WidecopyError):
    """The resolved type/signature graph could not be produced or is invalid.

    Raised by providers for malformed documents, duplicate identities and
    unknown references, and by the size model when it meets a by-value
    cycle. No diagnostics are reported for a run that raises it.
    """


class ConfigurationError(WidecopyError):
    """A size, alignment or threshold value is not a positive integer."""
