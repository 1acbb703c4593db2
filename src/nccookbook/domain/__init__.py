from .models import ConnectionStatus, Credential, DetailState, ImageHandle, RecipeDetail, RecipeSummary
from .parsing import format_duration, normalize_keywords, parse_detail, parse_summaries, parse_summary
from .result import Result
from .signals import Signal

__all__ = [
    "ConnectionStatus",
    "Credential",
    "DetailState",
    "ImageHandle",
    "RecipeDetail",
    "RecipeSummary",
    "Result",
    "Signal",
    "format_duration",
    "normalize_keywords",
    "parse_detail",
    "parse_summaries",
    "parse_summary",
]
