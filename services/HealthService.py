# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-18
# Description: HealthService.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Dict

from api.schemas.health import DeepHealthResponse, IndexSummary
from services.QueryService import SearchContext


@dataclass
class HealthService:
    """
    Reports on the loaded search context.
    The self-similarity probe searches with row 0's own vector and expects
    row 0 back as the (tied) best hit.
    """

    context: SearchContext

    def deep_health(self) -> DeepHealthResponse:
        index = self.context.index
        results: Dict[str, bool] = {
            "index_loaded": True,
            "dimension_match": index.dimension == self.context.model.dimension,
        }

        if index.size() > 0:
            probe = index.row(0)
            top = self.context.engine.search(probe, 1)
            own_score = float(self.context.engine.scores(probe)[0])
            results["self_similarity"] = bool(top) and (top[0].row_id == 0 or top[0].score == own_score)

        overall_status = "ok" if all(results.values()) else "error"

        return DeepHealthResponse(
            status=overall_status,
            results=results,
            index=IndexSummary(
                embedding_model=self.context.model.model_name,
                dimension=index.dimension,
                size=index.size(),
            ),
        )
