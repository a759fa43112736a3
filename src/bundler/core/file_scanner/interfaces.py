"""
Abstract interfaces for bundling operations.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

from .models import BundleRecord
from .skip_ledger import SkipLedger


class BundleSinkInterface(ABC):
    """
    Abstract interface for the destination of bundle records.

    The scanner calls write() once per accepted file, in visitation order,
    and finalize() once after the walk completes.
    """

    @abstractmethod
    def write(self, record: BundleRecord) -> None:
        """
        Serialize one record.

        Args:
            record: The accepted file to emit
        """
        pass

    @abstractmethod
    def finalize(self) -> None:
        """Flush any buffered output."""
        pass


class FileScannerInterface(ABC):
    """
    Abstract interface for walking a source tree into a sink.
    """

    @abstractmethod
    def bundle(
        self,
        root_path: Path,
        sink: BundleSinkInterface,
        ledger: SkipLedger,
        progress_callback: Optional[Callable[[BundleRecord], None]] = None,
    ) -> int:
        """
        Walk root_path and emit one record per accepted file.

        Args:
            root_path: Root directory to walk
            sink: Destination for accepted files
            ledger: Ledger receiving every skipped path
            progress_callback: Optional hook called after each emitted record

        Returns:
            Number of records emitted

        Raises:
            TraversalError: If a directory cannot be enumerated
        """
        pass
