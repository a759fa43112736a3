"""
Skip ledger recording why entries were left out of a bundle.
"""

from collections.abc import Iterator

from .models import SkipReason


class SkipLedger:
    """
    Append-only record of skipped paths, grouped by SkipReason.

    Paths are kept in the order they were recorded. Reasons are a closed
    enumeration, so a report can never fragment on a misspelled key.
    """

    def __init__(self) -> None:
        self._entries: dict[SkipReason, list[str]] = {reason: [] for reason in SkipReason}

    def record(self, reason: SkipReason, path: str) -> None:
        if not isinstance(reason, SkipReason):
            raise TypeError(f"Expected SkipReason, got {type(reason).__name__}")
        self._entries[reason].append(path)

    def paths(self, reason: SkipReason) -> list[str]:
        """Return a copy of the paths recorded under reason."""
        return list(self._entries[reason])

    def items(self) -> Iterator[tuple[SkipReason, list[str]]]:
        """Yield (reason, paths) for non-empty reasons in enum order."""
        for reason in SkipReason:
            paths = self._entries[reason]
            if paths:
                yield reason, list(paths)

    @property
    def total(self) -> int:
        return sum(len(paths) for paths in self._entries.values())

    def __len__(self) -> int:
        return self.total

    def __bool__(self) -> bool:
        return self.total > 0

    def __contains__(self, path: str) -> bool:
        return any(path in paths for paths in self._entries.values())

    def to_dict(self) -> dict[str, list[str]]:
        """Convert to a label -> paths mapping, omitting empty reasons."""
        return {reason.label: paths for reason, paths in self.items()}
