import logging

from fastapi import APIRouter, Depends, HTTPException

from portal.analytics import service
from portal.analytics.schemas import AnalyticsResponse
from portal.auth.dependencies import require_admin
from portal.errors import INTERNAL_ERROR
from portal.storage import JsonStore, get_store

router = APIRouter(prefix="/api/admin", tags=["analytics"])
logger = logging.getLogger(__name__)


@router.get("/analytics", response_model=AnalyticsResponse, dependencies=[Depends(require_admin)])
def get_analytics(store: JsonStore = Depends(get_store)):
    """
    Totals, average rating, per-category / rating / status counts and the
    most common words in comments.
    """
    try:
        return service.get_analytics(store)
    except Exception as e:
        logger.error(f"Error fetching analytics: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
