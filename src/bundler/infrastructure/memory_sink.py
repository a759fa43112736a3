"""
In-memory sink for library callers and tests.
"""

from bundler.core.file_scanner import BundleRecord, BundleSinkInterface


class MemorySink(BundleSinkInterface):
    """Collects records in a list, in the order they were written."""

    def __init__(self) -> None:
        self.records: list[BundleRecord] = []
        self.finalized = False

    def write(self, record: BundleRecord) -> None:
        if self.finalized:
            raise RuntimeError("Cannot write to a finalized sink")
        self.records.append(record)

    def finalize(self) -> None:
        self.finalized = True

    def paths(self) -> list[str]:
        return [r.relative_path for r in self.records]

    def get(self, relative_path: str) -> BundleRecord | None:
        for record in self.records:
            if record.relative_path == relative_path:
                return record
        return None
