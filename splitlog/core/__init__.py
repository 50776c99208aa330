"""
Core - Split logic and ports

This package contains:
- domain.py: Matchers, configuration and result models
- errors.py: Error taxonomy
- scanner.py: Line scanner with bounded lookback and split resolution
- ports.py: Port interfaces (abstractions for the filesystem)
- services.py: Application services (use cases)
"""
from .domain import (
    LineMatcher,
    PatternMatcher,
    SplitConfig,
    SplitPoint,
    PreviewLine,
    SplitResult,
    build_config,
)
from .errors import (
    SplitlogError,
    ConfigurationError,
    PatternError,
    NotFoundError,
    IsDirectoryError,
    ConflictError,
    BinaryInputError,
    SplitIOError,
    SplitResolutionError,
    SplitNotFoundError,
    InvalidSplitPositionError,
)
from .ports import SplitStorage
from .services import SplitFileService, DryRunService

__all__ = [
    # Domain models
    "LineMatcher",
    "PatternMatcher",
    "SplitConfig",
    "SplitPoint",
    "PreviewLine",
    "SplitResult",
    "build_config",
    # Errors
    "SplitlogError",
    "ConfigurationError",
    "PatternError",
    "NotFoundError",
    "IsDirectoryError",
    "ConflictError",
    "BinaryInputError",
    "SplitIOError",
    "SplitResolutionError",
    "SplitNotFoundError",
    "InvalidSplitPositionError",
    # Ports
    "SplitStorage",
    # Services
    "SplitFileService",
    "DryRunService",
]
