import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from portal.errors import INTERNAL_ERROR
from portal.feedback import schemas, service
from portal.storage import JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/feedback",
    tags=["feedback"],
    responses={404: {"description": "Not found"}},
)


@router.post("", response_model=schemas.FeedbackCreateResponse, status_code=status.HTTP_201_CREATED)
def create_feedback(
    feedback: schemas.FeedbackCreate,
    request: Request,
    store: JsonStore = Depends(get_store),
):
    """
    Submit anonymous feedback. No session or identity is required.
    """
    try:
        entry = service.submit_feedback(store, feedback, request.headers.get("user-agent"))
    except service.FeedbackValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error submitting feedback: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    return {'message': 'Feedback submitted successfully', 'feedback_id': entry['feedback_id']}
