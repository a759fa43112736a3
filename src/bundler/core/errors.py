"""
Exception hierarchy for the bundler.
"""

from typing import Iterable, Optional


class BundleError(Exception):
    """Raised when a bundling run cannot complete."""


class TraversalError(BundleError):
    """Raised when a directory cannot be enumerated during the walk."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class UnknownProjectTypeError(ValueError):
    """Raised when a project type identifier does not name a known preset."""

    def __init__(self, value: str, available: Iterable[str]):
        self.value = value
        self.available = sorted(available)
        super().__init__(
            f"Invalid project type '{value}'. Available types are: {', '.join(self.available)}"
        )
