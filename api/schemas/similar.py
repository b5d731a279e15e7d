# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-18
# Description: similar.py
# -----------------------------------------------------------------------------
from typing import List

from pydantic import Field, BaseModel

from settings import SIMILAR_DEFAULTS


class SimilarRequest(BaseModel):
    text: str = Field(..., min_length=1)
    num_results: int = Field(
        SIMILAR_DEFAULTS["num_results"], ge=0, le=SIMILAR_DEFAULTS["max_num_results"]
    )

class SimilarResponse(BaseModel):
    # Each entry: "<row text> (index: <id> score: <score>)"
    text: List[str]

class ItemResponse(BaseModel):
    index: int
    text: str
