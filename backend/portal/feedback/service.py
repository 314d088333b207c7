import logging
import math
from typing import Any, Dict, Optional, Union

from portal import models
from portal.feedback.schemas import FeedbackCreate
from portal.storage import JsonStore

logger = logging.getLogger(__name__)

MIN_COMMENT_LENGTH = 5
MIN_RATING = 1
MAX_RATING = 5


class FeedbackValidationError(Exception):
    """Submission rejected; the message is shown to the submitter."""


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ''
    return value == 0


def parse_rating(value: Any) -> Optional[Union[int, float]]:
    """
    Numeric value of a rating sent as a number or numeric string, unchanged
    so the range check sees fractions. Returns None when the value is not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    else:
        text = str(value).strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def submit_feedback(store: JsonStore, feedback: FeedbackCreate, user_agent: Optional[str]) -> Dict[str, Any]:
    """
    Validate a submission and append it to the feedback file.

    Checks run in a fixed order: required fields, comment length, rating
    range, then category. The first failing check wins.

    Raises:
        FeedbackValidationError: if any check fails
    """
    if _is_blank(feedback.category) or _is_blank(feedback.rating) or _is_blank(feedback.comment):
        raise FeedbackValidationError("All fields are required")

    if len(feedback.comment) < MIN_COMMENT_LENGTH:
        raise FeedbackValidationError(f"Comment must be at least {MIN_COMMENT_LENGTH} characters long")

    rating_value = parse_rating(feedback.rating)
    if rating_value is None or rating_value < MIN_RATING or rating_value > MAX_RATING:
        raise FeedbackValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    rating = int(rating_value)

    category_id = models.resolve_category_id(store.read_categories(), feedback.category)
    if not category_id:
        raise FeedbackValidationError("Invalid category")

    entries = store.read_feedback()
    entry = models.new_feedback_entry(category_id, rating, feedback.comment, user_agent)
    entries.append(entry)
    store.write_feedback(entries)

    logger.info(f"Stored feedback {entry['feedback_id']} in category {category_id} with rating {rating}")
    return entry
