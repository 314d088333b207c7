from pydantic import BaseModel
from typing import Dict, List, Union


class CommonWord(BaseModel):
    word: str
    count: int


class AnalyticsResponse(BaseModel):
    totalFeedback: int
    averageRating: Union[str, int]
    categoryStats: Dict[str, int]
    categoryMap: Dict[str, str]
    ratingStats: Dict[str, int]
    statusStats: Dict[str, int]
    commonWords: List[CommonWord]
