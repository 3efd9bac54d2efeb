"""Asset extraction API router.

Extraction never raises past the service boundary; failed results are
mapped here to 429 (quota, with Retry-After), 503 (no API key) or 502.
"""

import math

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from wealthvue.database import get_db
from wealthvue.dependencies.services import get_extraction_service, get_rate_cache
from wealthvue.schemas.asset import Asset as AssetSchema
from wealthvue.schemas.common import ErrorResponse
from wealthvue.schemas.extraction import (
    ConfirmDraftsRequest,
    DraftsResponse,
    ScreenshotExtractionRequest,
    TextExtractionRequest,
)
from wealthvue.services.extraction.draft_service import DraftService
from wealthvue.services.extraction.extraction_service import AssetExtractionService
from wealthvue.services.extraction.types import ExtractionFailure, ExtractionFailureReason
from wealthvue.services.fx.rate_cache import FxRateCache

router = APIRouter(prefix="/api/extraction", tags=["extraction"])

FAILURE_STATUS = {
    ExtractionFailureReason.QUOTA_EXCEEDED: status.HTTP_429_TOO_MANY_REQUESTS,
    ExtractionFailureReason.NOT_CONFIGURED: status.HTTP_503_SERVICE_UNAVAILABLE,
}

FAILURE_RESPONSES = {
    429: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def failure_response(failure: ExtractionFailure) -> JSONResponse:
    """Render an extraction failure as an ErrorResponse."""
    status_code = FAILURE_STATUS.get(failure.reason, status.HTTP_502_BAD_GATEWAY)
    body = ErrorResponse(
        error=failure.reason.value, message=failure.message, retry_after=failure.retry_after
    )
    headers = {}
    if failure.retry_after is not None:
        headers["Retry-After"] = str(math.ceil(failure.retry_after))
    return JSONResponse(
        status_code=status_code, content=body.model_dump(mode="json"), headers=headers
    )


@router.post("/text", response_model=DraftsResponse, responses=FAILURE_RESPONSES)
def extract_from_text(
    request: TextExtractionRequest,
    extraction: AssetExtractionService = Depends(get_extraction_service),
) -> DraftsResponse | JSONResponse:
    """Parse a plain-language asset description into drafts."""
    result = extraction.parse_text(request.text, request.preferred_currency)
    if not result.ok:
        return failure_response(result.failure)
    return DraftsResponse(drafts=result.items)


@router.post("/screenshot", response_model=DraftsResponse, responses=FAILURE_RESPONSES)
def extract_from_screenshot(
    request: ScreenshotExtractionRequest,
    extraction: AssetExtractionService = Depends(get_extraction_service),
) -> DraftsResponse | JSONResponse:
    """Extract every visible asset from a portfolio screenshot."""
    result = extraction.parse_screenshot(
        request.image, request.preferred_currency, request.mime_type
    )
    if not result.ok:
        return failure_response(result.failure)
    return DraftsResponse(drafts=result.items)


@router.post("/confirm", response_model=list[AssetSchema], status_code=status.HTTP_201_CREATED)
def confirm_drafts(
    request: ConfirmDraftsRequest,
    db: Session = Depends(get_db),
    rate_cache: FxRateCache = Depends(get_rate_cache),
):
    """Save reviewed drafts, merging into same-named assets of the same type."""
    rates = rate_cache.get_rates().rates
    return DraftService(db).confirm_drafts(request.drafts, rates)
