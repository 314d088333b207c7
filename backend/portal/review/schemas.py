from pydantic import BaseModel
from typing import Any, Optional


class FeedbackUpdate(BaseModel):
    """Admin edits. Omitted fields are left untouched."""
    status: Optional[Any] = None
    admin_note: Optional[Any] = None
    category: Optional[Any] = None


class BulkDeleteRequest(BaseModel):
    ids: Optional[Any] = None


class DeleteResponse(BaseModel):
    success: bool
    deleted: int
