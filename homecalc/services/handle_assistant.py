"""Assistant Flow: conversational Q&A with optional local-provider lookup.

Invariants:
    - History is caller-owned; nothing is kept between calls
    - link is either an external URL or an existing calculator slug
    - Provider lookups are bounded by the invoker's tool round limit
    - After a successful provider lookup with no link, link points to a maps
      search for "<service> in <location>"

Design Decisions:
    - Location gating, link choice and topic refusal are prompt rules, not
      code branches; scenario tests pin them down with a scripted model
"""

import logging
from urllib.parse import quote_plus

from homecalc.core.catalog import CalculatorCatalog
from homecalc.core.domain_types import FlowName
from homecalc.core.errors import ErrorContext, HomeCalcError
from homecalc.core.normalize import normalize_assistant
from homecalc.core.prompts import PROVIDER_TOOL_NAME, compose_assistant_prompt
from homecalc.core.schema_validator import validate_request
from homecalc.schemas.flows import AssistantOutput, AssistantRequest, AssistantResult
from homecalc.services.model_invoker import ModelInvoker, ToolCallRecord
from homecalc.services.tool_dispatch import ToolDispatch

logger = logging.getLogger(__name__)

MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="


def maps_search_link(service: str, location: str) -> str:
    return MAPS_SEARCH_URL + quote_plus(f"{service.strip()} in {location.strip()}")


class AssistantHandler:
    """chatbot operation."""

    def __init__(
        self, catalog: CalculatorCatalog, invoker: ModelInvoker,
        dispatch: ToolDispatch,
    ):
        self.catalog = catalog
        self.invoker = invoker
        self.dispatch = dispatch

    async def chatbot(self, request) -> AssistantResult:
        ctx = ErrorContext(flow=FlowName.ASSISTANT.value)
        try:
            req = validate_request(AssistantRequest, request, ctx)
            prompt = compose_assistant_prompt(
                self.catalog, req.query, list(req.history), req.location,
            )
            invocation = await self.invoker.invoke(
                prompt, AssistantOutput, dispatch=self.dispatch, context=ctx,
            )
            result = normalize_assistant(invocation.output, self.catalog, ctx)
        except HomeCalcError as e:
            logger.warning(
                "Assistant failed: %s", e.message,
                extra=e.log_fields(),
            )
            raise

        lookup = _last_provider_lookup(invocation.tool_calls)
        if result.link is None and lookup is not None:
            result = result.model_copy(update={
                "link": maps_search_link(
                    lookup.arguments["service"], lookup.arguments["location"],
                ),
            })
        logger.info(
            "Assistant answered",
            extra={"flow": ctx.flow, "round_number": invocation.rounds},
        )
        return result


def _last_provider_lookup(calls: list[ToolCallRecord]) -> ToolCallRecord | None:
    for call in reversed(calls):
        if call.tool_name == PROVIDER_TOOL_NAME and call.succeeded:
            return call
    return None
