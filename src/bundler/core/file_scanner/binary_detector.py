"""
Null-byte sniffing for binary content.
"""

import os
from typing import Union

DEFAULT_SNIFF_BYTES = 1024


def is_binary(path: Union[str, os.PathLike], sniff_bytes: int = DEFAULT_SNIFF_BYTES) -> bool:
    """
    Check whether a file looks binary.

    Reads at most sniff_bytes from the start of the file and reports binary
    if any of them is a zero byte. Empty files are text. Binary structure
    after the sniffed prefix goes undetected.

    Args:
        path: Path to the file
        sniff_bytes: Size of the prefix to inspect

    Returns:
        True if a null byte was found in the prefix

    Raises:
        ValueError: If sniff_bytes is not positive
        OSError: If the file cannot be opened or read
    """
    if sniff_bytes <= 0:
        raise ValueError(f"sniff_bytes must be positive, got {sniff_bytes}")
    with open(path, "rb") as f:
        prefix = f.read(sniff_bytes)
    return b"\x00" in prefix
