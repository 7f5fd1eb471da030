"""Tool Dispatch: explicit routing from tool_name to handler function.

Invariants:
    - Every tool->handler mapping is visible in one dict, no auto-discovery
    - Arguments are validated against the tool's input schema before execution
    - Results are validated/coerced against the declared result shape
    - Every failure (unknown tool, bad arguments, lookup error, timeout,
      malformed result) raises ToolInvocationError
    - No knowledge of prompts or conversation state
"""

import asyncio
import logging
from time import perf_counter

from pydantic import TypeAdapter, ValidationError

from homecalc.core.errors import ErrorContext, ToolInvocationError
from homecalc.core.prompts import PROVIDER_TOOL_NAME
from homecalc.core.schema_validator import first_violation
from homecalc.infrastructure.places import ProviderDirectory
from homecalc.schemas.tools import ProviderLookupInput, ServiceProvider
from homecalc.services.define_tools import PROVIDER_LOOKUP_TOOL

logger = logging.getLogger(__name__)

_PROVIDER_LIST = TypeAdapter(list[ServiceProvider])


class ToolDispatch:
    """Routes tool_name -> handler. Explicit registration."""

    def __init__(self, directory: ProviderDirectory, timeout_seconds: float = 10.0):
        self._directory = directory
        self._timeout = timeout_seconds
        self._handlers = {
            PROVIDER_TOOL_NAME: self.find_local_service_providers,
        }
        self._definitions = [PROVIDER_LOOKUP_TOOL]

    def declared_tools(self) -> list[dict]:
        return list(self._definitions)

    async def execute(
        self, tool_name: str, input_data: dict,
        context: ErrorContext | None = None,
    ) -> list[dict]:
        """Route tool_name to handler and return its validated result."""
        handler = self._handlers.get(tool_name)
        if handler is None:
            raise ToolInvocationError(
                f"Tool '{tool_name}' does not exist.", tool_name,
                "unknown_tool", context=context,
            )
        start = perf_counter()
        result = await handler(input_data, context)
        logger.info(
            "Tool executed",
            extra={
                "tool_name": tool_name,
                "latency_ms": round((perf_counter() - start) * 1000, 1),
                "result_count": len(result),
            },
        )
        return result

    async def find_local_service_providers(
        self, input_data: dict, context: ErrorContext | None = None,
    ) -> list[dict]:
        name = PROVIDER_TOOL_NAME
        try:
            args = ProviderLookupInput.model_validate(input_data)
        except ValidationError as e:
            field, msg = first_violation(e)
            raise ToolInvocationError(
                f"{field}: {msg}", name, "invalid_arguments", context=context,
            ) from e

        try:
            raw = await asyncio.wait_for(
                self._directory.find(args.service, args.location),
                timeout=self._timeout,
            )
        except TimeoutError as e:
            raise ToolInvocationError(
                f"Lookup exceeded {self._timeout}s", name, "timeout",
                context=context,
            ) from e
        except Exception as e:
            raise ToolInvocationError(
                str(e), name, "lookup_failed", context=context,
            ) from e

        try:
            providers = _PROVIDER_LIST.validate_python(raw)
        except ValidationError as e:
            field, msg = first_violation(e)
            raise ToolInvocationError(
                f"{field}: {msg}", name, "invalid_result", context=context,
            ) from e
        return [p.model_dump(by_alias=True) for p in providers]
