"""Recommendation Flow: free-text project description -> calculator names.

Invariants:
    - Request validated before any model call
    - Every returned name exists byte-for-byte in the catalog; an unknown
      name fails the flow (ResponseValidationError)
    - Empty list is the "no match" answer, never an error
    - No tools, single model round-trip
"""

import logging

from homecalc.core.catalog import CalculatorCatalog
from homecalc.core.domain_types import FlowName
from homecalc.core.errors import ErrorContext, HomeCalcError
from homecalc.core.normalize import normalize_recommendations
from homecalc.core.prompts import compose_recommendation_prompt
from homecalc.core.schema_validator import validate_request
from homecalc.schemas.flows import (
    RecommendationOutput,
    RecommendationRequest,
    RecommendationResult,
)
from homecalc.services.model_invoker import ModelInvoker

logger = logging.getLogger(__name__)


class RecommendationHandler:
    """recommendCalculators operation."""

    def __init__(self, catalog: CalculatorCatalog, invoker: ModelInvoker):
        self.catalog = catalog
        self.invoker = invoker

    async def recommend_calculators(self, request) -> RecommendationResult:
        ctx = ErrorContext(flow=FlowName.RECOMMENDATION.value)
        try:
            req = validate_request(RecommendationRequest, request, ctx)
            prompt = compose_recommendation_prompt(
                self.catalog, req.project_description,
            )
            invocation = await self.invoker.invoke(
                prompt, RecommendationOutput, context=ctx,
            )
            result = normalize_recommendations(
                invocation.output, self.catalog, ctx,
            )
        except HomeCalcError as e:
            logger.warning(
                "Recommendation failed: %s", e.message,
                extra=e.log_fields(),
            )
            raise
        logger.info(
            "Recommendations produced",
            extra={"flow": ctx.flow, "result_count": len(result.recommendations)},
        )
        return result
