"""widecopy package root."""

from widecopy.exceptions import ConfigurationError, ResolutionFailure, WidecopyError

__all__ = [
    "__version__",
    "ConfigurationError",
    "ResolutionFailure",
    "WidecopyError",
]

__version__ = "0.1.0"
