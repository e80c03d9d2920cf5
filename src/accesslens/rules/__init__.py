from accesslens.rules.checks import ALL_CHECKS, AnalysisContext, Check
from accesslens.rules.engine import evaluate

__all__ = ["ALL_CHECKS", "AnalysisContext", "Check", "evaluate"]
