"""Parameter-Completion Flow: estimate blank calculator inputs, plus guidance.

Invariants:
    - filledValues keys are a subset of knownParameters keys; an undeclared
      key fails the flow (ResponseValidationError)
    - Parameters the user already filled are never overwritten
    - No tools, single model round-trip, invoked on demand only
"""

import logging

from homecalc.core.domain_types import FlowName
from homecalc.core.errors import ErrorContext, HomeCalcError
from homecalc.core.normalize import normalize_completion
from homecalc.core.prompts import compose_completion_prompt
from homecalc.core.schema_validator import validate_request
from homecalc.schemas.flows import CompletionOutput, CompletionRequest, CompletionResult
from homecalc.services.model_invoker import ModelInvoker

logger = logging.getLogger(__name__)


class CompletionHandler:
    """getAiAssistance operation."""

    def __init__(self, invoker: ModelInvoker):
        self.invoker = invoker

    async def get_ai_assistance(self, request) -> CompletionResult:
        ctx = ErrorContext(flow=FlowName.COMPLETION.value)
        try:
            req = validate_request(CompletionRequest, request, ctx)
            prompt = compose_completion_prompt(
                req.calculator_name, req.known_parameters, req.units,
            )
            invocation = await self.invoker.invoke(
                prompt, CompletionOutput, context=ctx,
            )
            result = normalize_completion(invocation.output, req, ctx)
        except HomeCalcError as e:
            logger.warning(
                "Completion failed: %s", e.message,
                extra=e.log_fields(),
            )
            raise
        logger.info(
            "Completion produced",
            extra={
                "flow": ctx.flow,
                "result_count": len(result.filled_values or {}),
            },
        )
        return result
