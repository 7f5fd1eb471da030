"""AI Flows: recommendCalculators, chatbot and getAiAssistance over HTTP.

Invariants:
    - Bodies are validated by Pydantic before the handler runs (400 on failure)
    - Flow failures surface through the HomeCalcError handler as one generic
      failure envelope; nothing partial is returned
    - Optional result fields are omitted when absent
"""

from fastapi import APIRouter, Depends

from homecalc.api.dependencies import (
    get_assistant_handler,
    get_completion_handler,
    get_recommendation_handler,
)
from homecalc.schemas.flows import (
    AssistantRequest,
    AssistantResult,
    CompletionRequest,
    CompletionResult,
    RecommendationRequest,
    RecommendationResult,
)
from homecalc.services.handle_assistant import AssistantHandler
from homecalc.services.handle_completion import CompletionHandler
from homecalc.services.handle_recommendation import RecommendationHandler

router = APIRouter(prefix="/api/v1", tags=["ai"])


@router.post("/recommendations", response_model=RecommendationResult)
async def recommend_calculators(
    body: RecommendationRequest,
    handler: RecommendationHandler = Depends(get_recommendation_handler),
):
    return await handler.recommend_calculators(body)


@router.post(
    "/assistant/chat", response_model=AssistantResult,
    response_model_exclude_none=True,
)
async def chatbot(
    body: AssistantRequest,
    handler: AssistantHandler = Depends(get_assistant_handler),
):
    return await handler.chatbot(body)


@router.post(
    "/assistance", response_model=CompletionResult,
    response_model_exclude_none=True,
)
async def get_ai_assistance(
    body: CompletionRequest,
    handler: CompletionHandler = Depends(get_completion_handler),
):
    return await handler.get_ai_assistance(body)
