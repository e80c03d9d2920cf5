"""accesslens: static accessibility analysis of HTML documents."""
from __future__ import annotations

__version__ = "0.1.0"

from accesslens.analyzer import analyze  # noqa: E402
from accesslens.color import contrast_ratio  # noqa: E402
from accesslens.config import AnalyzerConfig  # noqa: E402
from accesslens.errors import (  # noqa: E402
    AccessLensError,
    ColorParseError,
    InputError,
    InternalError,
    ParseRecoveryWarning,
)
from accesslens.model import Finding, Report, Severity  # noqa: E402

__all__ = [
    "__version__",
    "AccessLensError",
    "AnalyzerConfig",
    "ColorParseError",
    "Finding",
    "InputError",
    "InternalError",
    "ParseRecoveryWarning",
    "Report",
    "Severity",
    "analyze",
    "contrast_ratio",
]
