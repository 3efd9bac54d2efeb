"""Portfolio analytics services.

Handles aggregation, historical change and allocation classification.
"""

from .aggregation import aggregate_portfolio, sort_assets
from .classification import (
    classify_archetype,
    classify_portfolio,
    score_diversification,
    score_risk,
)
from .history import calculate_change, find_period_anchor
from .nav_history_service import NavHistoryService

__all__ = [
    "NavHistoryService",
    "aggregate_portfolio",
    "calculate_change",
    "classify_archetype",
    "classify_portfolio",
    "find_period_anchor",
    "score_diversification",
    "score_risk",
    "sort_assets",
]
