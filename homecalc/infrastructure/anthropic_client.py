"""Anthropic Client: wraps AsyncAnthropic with a timeout and error mapping.

Invariants:
    - Exactly one HTTP request per create_message() call; no retries here
      (SDK retries disabled as well)
    - Every SDK failure is raised as ModelInvocationError with a reason:
      timeout, rate_limit, connection_error, client_error, unknown
    - asyncio.CancelledError is never caught

Design Decisions:
    - Wrapper over raw client: keeps error mapping out of the invoker loop
    - HTTP 529 (overloaded) reported as connection_error: same user outcome
"""

import logging

import anthropic
from anthropic import (
    APIConnectionError,
    APIError,
    APIStatusError,
    APITimeoutError,
    InternalServerError,
    RateLimitError,
)

from homecalc.core.errors import ErrorContext, ModelInvocationError

logger = logging.getLogger(__name__)

_OVERLOADED_STATUS = 529


def _is_overloaded(e: APIError) -> bool:
    """Check if error is Anthropic 529 Overloaded."""
    return isinstance(e, APIStatusError) and e.status_code == _OVERLOADED_STATUS


class AnthropicModelClient:
    """Single-shot Messages API client with timeout and error mapping."""

    def __init__(self, api_key: str, timeout_seconds: float = 30.0):
        self.client = anthropic.AsyncAnthropic(
            api_key=api_key,
            timeout=timeout_seconds,
            max_retries=0,
        )

    async def create_message(
        self,
        *,
        model: str,
        max_tokens: int,
        system: str,
        tools: list[dict],
        tool_choice: dict,
        messages: list[dict],
        context: ErrorContext | None = None,
    ):
        """Create one message. Raises ModelInvocationError on any failure."""
        # APITimeoutError subclasses APIConnectionError: order matters
        try:
            response = await self.client.messages.create(
                model=model,
                max_tokens=max_tokens,
                system=system,
                tools=tools,
                tool_choice=tool_choice,
                messages=messages,
            )
        except APITimeoutError:
            raise ModelInvocationError(
                "API timeout", "timeout", context=context,
            )
        except RateLimitError as e:
            raise ModelInvocationError(
                "Rate limit exceeded", "rate_limit",
                retry_after_ms=self._extract_retry_after(e),
                context=context,
            )
        except (APIConnectionError, InternalServerError) as e:
            raise ModelInvocationError(
                f"Connection error: {e}", "connection_error", context=context,
            )
        except APIError as e:
            if _is_overloaded(e):
                raise ModelInvocationError(
                    "Anthropic API overloaded (529)", "connection_error",
                    context=context,
                )
            raise ModelInvocationError(
                str(e), "client_error", context=context,
            )
        self._log_success(response)
        return response

    def _log_success(self, response) -> None:
        usage = response.usage
        logger.info(
            "Anthropic API success",
            extra={
                "input_tokens": usage.input_tokens,
                "output_tokens": usage.output_tokens,
            },
        )

    def _extract_retry_after(self, error: RateLimitError) -> int | None:
        """Extract Retry-After header (returns milliseconds)."""
        response = getattr(error, "response", None)
        if response is None:
            return None
        val = response.headers.get("retry-after")
        if val and val.isdigit():
            return int(val) * 1000
        return None
