# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-18
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Dict

from pydantic import BaseModel

class HealthResponse(BaseModel):
    status: str
    message: str

class IndexSummary(BaseModel):
    embedding_model: str
    dimension: int
    size: int

class DeepHealthResponse(BaseModel):
    status: str
    results: Dict[str, bool]
    index: IndexSummary
