import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from portal.auth.dependencies import require_admin
from portal.errors import INTERNAL_ERROR
from portal.feedback.schemas import FeedbackRead
from portal.review import schemas, service
from portal.review.filters import FeedbackQuery, InvalidFilter
from portal.storage import JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin/feedback",
    tags=["review"],
    dependencies=[Depends(require_admin)],
    responses={404: {"description": "Not found"}},
)


def feedback_query(
    category: Optional[str] = Query(default=None),
    rating: Optional[str] = Query(default=None),
    status: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
) -> FeedbackQuery:
    return FeedbackQuery(
        category=category,
        rating=rating,
        status=status,
        search=search,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("", response_model=List[FeedbackRead])
def list_feedback(
    query: FeedbackQuery = Depends(feedback_query),
    store: JsonStore = Depends(get_store),
):
    """
    List feedback matching every supplied filter, newest first.
    """
    try:
        result = service.query_feedback(store, query)
    except InvalidFilter as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching feedback: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    logger.debug(f"list_feedback returned {len(result)} entries for {query}")
    return result


@router.get("/export")
def export_feedback(
    query: FeedbackQuery = Depends(feedback_query),
    store: JsonStore = Depends(get_store),
):
    """
    Download the filtered feedback as CSV.
    """
    try:
        result = service.query_feedback(store, query)
        body = service.export_csv(result)
    except InvalidFilter as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error exporting feedback: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    filename = f"feedback-export-{datetime.now(timezone.utc).date().isoformat()}.csv"
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/bulk-delete", response_model=schemas.DeleteResponse)
def bulk_delete(payload: schemas.BulkDeleteRequest, store: JsonStore = Depends(get_store)):
    if not isinstance(payload.ids, list) or len(payload.ids) == 0:
        raise HTTPException(status_code=400, detail="ids array is required")
    try:
        deleted = service.bulk_delete_feedback(store, [str(i) for i in payload.ids])
    except Exception as e:
        logger.error(f"Error bulk deleting feedback: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    return {'success': True, 'deleted': deleted}


@router.get("/{feedback_id}", response_model=FeedbackRead)
def get_feedback(feedback_id: str, store: JsonStore = Depends(get_store)):
    try:
        return service.get_feedback(store, feedback_id)
    except service.FeedbackNotFound:
        raise HTTPException(status_code=404, detail="Feedback not found")
    except Exception as e:
        logger.error(f"Error fetching feedback by id: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.put("/{feedback_id}", response_model=FeedbackRead)
def update_feedback(
    feedback_id: str,
    update: schemas.FeedbackUpdate,
    store: JsonStore = Depends(get_store),
):
    """
    Change status, admin note or category of one entry.
    """
    try:
        return service.update_feedback(store, feedback_id, update)
    except service.FeedbackNotFound:
        raise HTTPException(status_code=404, detail="Feedback not found")
    except service.InvalidUpdate as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating feedback: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.delete("/{feedback_id}", response_model=schemas.DeleteResponse)
def delete_feedback(feedback_id: str, store: JsonStore = Depends(get_store)):
    try:
        deleted = service.delete_feedback(store, feedback_id)
    except service.FeedbackNotFound:
        raise HTTPException(status_code=404, detail="Feedback not found")
    except Exception as e:
        logger.error(f"Error deleting feedback: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    logger.info(f"Deleted feedback {feedback_id}")
    return {'success': True, 'deleted': deleted}
