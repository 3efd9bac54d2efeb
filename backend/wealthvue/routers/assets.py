"""Assets API router."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from wealthvue.config import settings
from wealthvue.constants import AssetSort
from wealthvue.database import get_db
from wealthvue.dependencies.services import get_extraction_service, get_rate_cache
from wealthvue.routers.extraction import FAILURE_RESPONSES, failure_response
from wealthvue.schemas.asset import Asset as AssetSchema
from wealthvue.schemas.asset import (
    AssetCreate,
    AssetUpdate,
    BulkDeleteRequest,
    BulkDeleteResponse,
)
from wealthvue.schemas.extraction import ReestimateRequest
from wealthvue.services.asset_service import AssetService
from wealthvue.services.extraction.extraction_service import AssetExtractionService
from wealthvue.services.fx.rate_cache import FxRateCache
from wealthvue.services.repositories.exceptions import NotFoundError

router = APIRouter(prefix="/api/assets", tags=["assets"])


def _not_found(asset_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail=f"Asset with id {asset_id} not found"
    )


@router.get("", response_model=list[AssetSchema])
def list_assets(
    sort_by: AssetSort = AssetSort.VALUE_DESC,
    display_currency: str = Query(
        settings.default_display_currency,
        description="Currency used to rank by value",
        pattern="^[A-Z]{3}$",
    ),
    db: Session = Depends(get_db),
    rate_cache: FxRateCache = Depends(get_rate_cache),
):
    """
    Get all assets in display order.

    Query Parameters:
        - sort_by: value_desc (default), value_asc or name_asc
        - display_currency: Currency values are compared in
    """
    rates = rate_cache.get_rates().rates
    return AssetService(db).list_assets(display_currency, rates, sort_by)


@router.post("", response_model=AssetSchema, status_code=status.HTTP_201_CREATED)
async def create_asset(asset: AssetCreate, db: Session = Depends(get_db)):
    """Create a manually entered asset."""
    return AssetService(db).create_asset(asset)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_assets(request: BulkDeleteRequest, db: Session = Depends(get_db)):
    """Delete several assets at once. Unknown ids are ignored."""
    return BulkDeleteResponse(deleted=AssetService(db).delete_assets(request.asset_ids))


@router.get("/{asset_id}", response_model=AssetSchema)
async def get_asset(asset_id: str, db: Session = Depends(get_db)):
    """Get a specific asset by ID."""
    try:
        return AssetService(db).get_asset(asset_id)
    except NotFoundError:
        raise _not_found(asset_id)


@router.put("/{asset_id}", response_model=AssetSchema)
async def update_asset(asset_id: str, asset_update: AssetUpdate, db: Session = Depends(get_db)):
    """
    Update an existing asset.

    Changing quantity or unit price recomputes the total value unless
    totalValue is part of the update.
    """
    try:
        return AssetService(db).update_asset(asset_id, asset_update)
    except NotFoundError:
        raise _not_found(asset_id)


@router.delete("/{asset_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_asset(asset_id: str, db: Session = Depends(get_db)):
    """Delete an asset."""
    try:
        AssetService(db).delete_asset(asset_id)
    except NotFoundError:
        raise _not_found(asset_id)
    return None


@router.post(
    "/{asset_id}/reestimate",
    response_model=AssetSchema,
    responses=FAILURE_RESPONSES,
)
def reestimate_asset(
    asset_id: str,
    request: ReestimateRequest | None = None,
    db: Session = Depends(get_db),
    extraction: AssetExtractionService = Depends(get_extraction_service),
) -> AssetSchema | JSONResponse:
    """Ask the extraction model for a fresh value estimate and store it."""
    service = AssetService(db)
    try:
        asset = service.get_asset(asset_id)
    except NotFoundError:
        raise _not_found(asset_id)

    currency = request.preferred_currency if request else settings.default_display_currency
    result = extraction.reestimate_value(asset, currency)
    if not result.ok:
        return failure_response(result.failure)
    return service.apply_estimate(asset_id, result.items[0])
