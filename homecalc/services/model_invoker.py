"""Model Invoker: one logical structured-output request, with bounded tool rounds.

Invariants:
    - Every model response must be a tool call (tool_choice "any"); each round
      is either FINAL (submit_result) or AWAITING_TOOL (any other tool)
    - FINAL input is validated against the output schema before it is returned
    - At most max_tool_rounds tool round-trips; a model still asking for tools
      after that fails closed with ModelInvocationError("round_limit")
    - Each model request has a deadline (request_timeout_seconds)
    - No retries: one failed request fails the invocation

Design Decisions:
    - Tool failure gets one recovery round: the error is returned to the model
      as an is_error tool_result and the next request only offers submit_result.
      If that round does not yield a valid answer, the ToolInvocationError is
      raised.
    - Tool calls inside one response execute serially, in order
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from homecalc.core.errors import (
    ErrorContext,
    ModelInvocationError,
    ResponseValidationError,
    ToolInvocationError,
)
from homecalc.core.prompts import SUBMIT_TOOL_NAME, ComposedPrompt
from homecalc.core.schema_validator import validate_response
from homecalc.services.define_tools import submit_result_tool
from homecalc.services.tool_dispatch import ToolDispatch

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_ANY_TOOL = {"type": "any"}
_FORCE_SUBMIT = {"type": "tool", "name": SUBMIT_TOOL_NAME}


@dataclass(frozen=True, slots=True)
class ToolCallRecord:
    """One executed tool call; lives only for the invocation."""
    tool_name: str
    arguments: dict
    succeeded: bool
    result: Any = None


@dataclass(slots=True)
class Invocation(Generic[M]):
    output: M
    tool_calls: list[ToolCallRecord] = field(default_factory=list)
    rounds: int = 0


def tool_use_blocks(response: Any) -> list[Any]:
    return [
        b for b in response.content
        if getattr(b, "type", None) == "tool_use"
    ]


def serialize_content(response: Any) -> list[dict]:
    return [b.model_dump(exclude_none=True) for b in response.content]


class ModelInvoker:
    """Stateless; safe to share across concurrent flow invocations."""

    def __init__(
        self,
        client,
        *,
        model: str,
        max_tokens: int = 1024,
        max_tool_rounds: int = 3,
        request_timeout_seconds: float = 30.0,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.max_tool_rounds = max_tool_rounds
        self.request_timeout_seconds = request_timeout_seconds

    async def invoke(
        self,
        prompt: ComposedPrompt,
        output_model: type[M],
        *,
        dispatch: ToolDispatch | None = None,
        context: ErrorContext | None = None,
    ) -> Invocation[M]:
        ctx = context or ErrorContext()
        submit_tool = submit_result_tool(output_model)
        all_tools = [*(dispatch.declared_tools() if dispatch else []), submit_tool]
        messages: list[dict] = [{"role": "user", "content": prompt.user}]
        tool_calls: list[ToolCallRecord] = []
        tool_failure: ToolInvocationError | None = None
        rounds = 0

        while True:
            ctx.round_number = rounds
            recovering = tool_failure is not None
            response = await self._request(
                prompt.system,
                [submit_tool] if recovering else all_tools,
                _FORCE_SUBMIT if recovering else _ANY_TOOL,
                messages, ctx,
            )
            blocks = tool_use_blocks(response)
            final = next((b for b in blocks if b.name == SUBMIT_TOOL_NAME), None)

            if recovering:
                output = self._recover(final, output_model, tool_failure, ctx)
                return Invocation(output, tool_calls, rounds)
            if final is not None:
                output = validate_response(output_model, final.input, ctx)
                return Invocation(output, tool_calls, rounds)
            if not blocks:
                raise ModelInvocationError(
                    "Model answered without a tool call",
                    "no_structured_output", context=ctx,
                )
            if rounds >= self.max_tool_rounds:
                logger.warning(
                    "Tool round limit reached",
                    extra={"flow": ctx.flow, "round_number": rounds},
                )
                raise ModelInvocationError(
                    f"Model requested tools after {self.max_tool_rounds} rounds",
                    "round_limit", context=ctx,
                )

            rounds += 1
            messages.append({"role": "assistant", "content": serialize_content(response)})
            results, tool_failure = await self._execute_tool_blocks(
                dispatch, blocks, tool_calls, ctx,
            )
            messages.append({"role": "user", "content": results})

    async def _request(self, system, tools, tool_choice, messages, ctx):
        try:
            return await asyncio.wait_for(
                self.client.create_message(
                    model=self.model,
                    max_tokens=self.max_tokens,
                    system=system,
                    tools=tools,
                    tool_choice=tool_choice,
                    messages=messages,
                    context=ctx,
                ),
                timeout=self.request_timeout_seconds,
            )
        except TimeoutError as e:
            raise ModelInvocationError(
                f"No response within {self.request_timeout_seconds}s",
                "timeout", context=ctx,
            ) from e

    def _recover(self, final, output_model, tool_failure, ctx):
        """Answer-without-tool round: any failure re-raises the tool error."""
        if final is None:
            raise tool_failure
        try:
            return validate_response(output_model, final.input, ctx)
        except ResponseValidationError as e:
            raise tool_failure from e

    async def _execute_tool_blocks(
        self, dispatch, blocks, tool_calls, ctx,
    ) -> tuple[list[dict], ToolInvocationError | None]:
        """Execute tool_use blocks. Returns (tool_result blocks, first failure)."""
        results = []
        failure = None
        for block in blocks:
            try:
                if dispatch is None:
                    raise ToolInvocationError(
                        "No tools are available for this request",
                        block.name, "unknown_tool", context=ctx,
                    )
                output = await dispatch.execute(block.name, block.input, ctx)
            except ToolInvocationError as e:
                logger.warning(
                    "Tool failed: %s", e.message,
                    extra={"flow": ctx.flow, "tool_name": block.name,
                           "error_code": e.code},
                )
                failure = failure or e
                tool_calls.append(ToolCallRecord(block.name, dict(block.input), False))
                results.append({
                    "type": "tool_result",
                    "tool_use_id": block.id,
                    "is_error": True,
                    "content": json.dumps({
                        "error_code": e.code,
                        "reason": e.reason,
                        "message": "The lookup failed. Answer without it.",
                    }),
                })
                continue
            tool_calls.append(ToolCallRecord(block.name, dict(block.input), True, output))
            results.append({
                "type": "tool_result",
                "tool_use_id": block.id,
                "content": json.dumps(output, ensure_ascii=False),
            })
        return results, failure

