"""
Services Layer - Orchestration of bundling runs.
"""

from bundler.services.bundle_models import (
    BundleError,
    BundleResult,
    TraversalError,
    UnknownProjectTypeError,
)
from bundler.services.bundle_service import BundleService

__all__ = [
    "BundleError",
    "BundleResult",
    "BundleService",
    "TraversalError",
    "UnknownProjectTypeError",
]
