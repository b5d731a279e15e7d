# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-18
# Description: similar router
# -----------------------------------------------------------------------------
import logging
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from api.dependencies import get_query_service
from api.schemas.similar import ItemResponse, SimilarRequest, SimilarResponse
from errors.DenseSearchErrors import (
    DimensionMismatchError,
    InferenceBusyError,
    InferenceError,
    OutOfRangeError,
)
from services.QueryService import QueryService
from settings import SIMILAR_DEFAULTS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["similar"])


def _raise_http(action: str, e: Exception) -> NoReturn:
    """Map a request-time failure to a structured error response."""
    if isinstance(e, InferenceBusyError):
        logger.warning("%s rejected: %s", action, e)
        raise HTTPException(status_code=503, detail=str(e), headers={"Retry-After": "1"})
    if isinstance(e, OutOfRangeError):
        raise HTTPException(status_code=404, detail=str(e))
    if isinstance(e, InferenceError):
        logger.exception("%s failed during inference: %s", action, e)
        raise HTTPException(status_code=502, detail=f"Inference failed: {e}")
    if isinstance(e, DimensionMismatchError):
        logger.exception("%s failed: %s", action, e)
        raise HTTPException(status_code=500, detail=f"Search failed: {e}")
    logger.exception("%s failed: %s", action, e)
    raise HTTPException(status_code=500, detail=f"{action} failed: {e}")


@router.post("/similar", response_model=SimilarResponse)
def find_similar(
    req: SimilarRequest,
    svc: QueryService = Depends(get_query_service),
) -> SimilarResponse:
    try:
        hits = svc.find_similar(req.text, req.num_results)
    except Exception as e:
        _raise_http("Similar search", e)

    return SimilarResponse(text=[svc.format_hit(h) for h in hits])


@router.get("/items/{row_id}", response_model=ItemResponse)
def get_item(
    row_id: int = Path(..., ge=0),
    svc: QueryService = Depends(get_query_service),
) -> ItemResponse:
    try:
        text = svc.get_text(row_id)
    except Exception as e:
        _raise_http("Item lookup", e)

    return ItemResponse(index=row_id, text=text)


@router.get("/items/{row_id}/similar", response_model=SimilarResponse)
def get_item_similar(
    row_id: int = Path(..., ge=0),
    num_results: int = Query(
        SIMILAR_DEFAULTS["num_results"], ge=0, le=SIMILAR_DEFAULTS["max_num_results"]
    ),
    svc: QueryService = Depends(get_query_service),
) -> SimilarResponse:
    try:
        hits = svc.similar_to_row(row_id, num_results)
    except Exception as e:
        _raise_http("Item similar search", e)

    return SimilarResponse(text=[svc.format_hit(h) for h in hits])
