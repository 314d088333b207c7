from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union


class FeedbackCreate(BaseModel):
    """
    Public submission payload. Fields are optional here so that missing
    values get the same 400 message as empty ones.
    """
    category: Optional[str] = None
    rating: Optional[Union[int, float, str]] = None
    comment: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "category": "general",
                "rating": 4,
                "comment": "The course content was clear and well paced.",
            }
        }
    )


class FeedbackCreateResponse(BaseModel):
    message: str
    feedback_id: str


class FeedbackRead(BaseModel):
    feedback_id: str
    category: str
    rating: int
    comment: str
    status: str = "open"
    admin_note: str = ""
    timestamp: str
    hash: Optional[str] = Field(default=None)
