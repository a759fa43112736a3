"""
Path validation utilities for the bundler.

Provides source directory and output file checks shared by the CLI and
the service layer.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class PathValidationResult:
    """Result of path validation.
    
    Attributes:
        valid: True if the path is valid for the requested operation.
        error_message: Human-readable error message if validation failed.
    """
    valid: bool
    error_message: Optional[str] = None


def validate_source_path(path: str | Path) -> PathValidationResult:
    """
    Validate that a path can be bundled.
    
    Performs the following checks:
    1. Path exists
    2. Path is a directory
    
    Args:
        path: Path to validate (string or Path object).
        
    Returns:
        PathValidationResult with valid=True if all checks pass,
        or valid=False with an appropriate error message.
    """
    try:
        p = Path(path) if isinstance(path, str) else path
        
        if not p.exists():
            return PathValidationResult(
                valid=False,
                error_message=f"Path '{path}' does not exist"
            )
        
        if not p.is_dir():
            return PathValidationResult(
                valid=False,
                error_message=f"Path '{path}' is not a directory"
            )
        
        return PathValidationResult(valid=True)
        
    except (OSError, ValueError) as e:
        return PathValidationResult(
            valid=False,
            error_message=f"Invalid path '{path}': {e}"
        )


def validate_output_path(path: str | Path) -> PathValidationResult:
    """
    Validate that a bundle can be written to path.

    The file may or may not exist, but must not be a directory.
    """
    p = Path(path) if isinstance(path, str) else path
    if p.is_dir():
        return PathValidationResult(
            valid=False,
            error_message=f"Output path '{path}' is a directory"
        )
    return PathValidationResult(valid=True)


def is_within(path: Path, root: Path) -> bool:
    """Check whether path lies inside root once both are resolved."""
    try:
        path.resolve().relative_to(root.resolve())
        return True
    except ValueError:
        return False
