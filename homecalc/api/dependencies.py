"""Dependencies: process-wide, stateless collaborators for the route handlers.

Invariants:
    - Catalog, invoker and dispatcher are built once and shared read-only
    - Handlers are cheap wrappers, built per request
    - Tests replace any of these through app.dependency_overrides
"""

from functools import lru_cache

from fastapi import Depends

from homecalc.config import get_settings
from homecalc.core.catalog import CalculatorCatalog, default_catalog
from homecalc.infrastructure.anthropic_client import AnthropicModelClient
from homecalc.infrastructure.places import (
    PlacesProviderDirectory,
    StaticProviderDirectory,
)
from homecalc.services.handle_assistant import AssistantHandler
from homecalc.services.handle_completion import CompletionHandler
from homecalc.services.handle_recommendation import RecommendationHandler
from homecalc.services.model_invoker import ModelInvoker
from homecalc.services.tool_dispatch import ToolDispatch


@lru_cache
def get_catalog() -> CalculatorCatalog:
    return default_catalog()


@lru_cache
def get_model_invoker() -> ModelInvoker:
    settings = get_settings()
    client = AnthropicModelClient(
        settings.anthropic_api_key,
        timeout_seconds=settings.anthropic_timeout_seconds,
    )
    return ModelInvoker(
        client,
        model=settings.agent_model,
        max_tokens=settings.agent_max_tokens,
        max_tool_rounds=settings.max_tool_rounds,
        request_timeout_seconds=settings.anthropic_timeout_seconds,
    )


@lru_cache
def get_tool_dispatch() -> ToolDispatch:
    settings = get_settings()
    if settings.google_places_api_key:
        directory = PlacesProviderDirectory(
            settings.google_places_api_key,
            timeout_seconds=settings.tool_timeout_seconds,
        )
    else:
        directory = StaticProviderDirectory()
    return ToolDispatch(directory, timeout_seconds=settings.tool_timeout_seconds)


def get_recommendation_handler(
    catalog: CalculatorCatalog = Depends(get_catalog),
    invoker: ModelInvoker = Depends(get_model_invoker),
) -> RecommendationHandler:
    return RecommendationHandler(catalog, invoker)


def get_assistant_handler(
    catalog: CalculatorCatalog = Depends(get_catalog),
    invoker: ModelInvoker = Depends(get_model_invoker),
    dispatch: ToolDispatch = Depends(get_tool_dispatch),
) -> AssistantHandler:
    return AssistantHandler(catalog, invoker, dispatch)


def get_completion_handler(
    invoker: ModelInvoker = Depends(get_model_invoker),
) -> CompletionHandler:
    return CompletionHandler(invoker)
