"""Asset extraction through a hosted language model.

- GeminiClient: generateContent calls with model rotation
- AssetExtractionService: text/screenshot parsing and portfolio analysis into
  typed results
- DraftService: draft defaults and confirmation into stored assets
"""

from .draft_service import DraftService
from .extraction_service import AssetExtractionService, PortfolioAnalysis, ValueEstimate
from .gemini_client import GeminiClient, GeminiResponseError
from .types import ExtractionFailure, ExtractionFailureReason, ExtractionResult

__all__ = [
    "AssetExtractionService",
    "DraftService",
    "ExtractionFailure",
    "ExtractionFailureReason",
    "ExtractionResult",
    "GeminiClient",
    "GeminiResponseError",
    "PortfolioAnalysis",
    "ValueEstimate",
]
