"""Response Normalizer: turns validated model output into caller result types.

Invariants:
    - Input is already schema-valid; required fields are never invented here
    - Optional fields absent from output get their declared defaults
    - Catalog and key-set invariants are checked after normalization and
      raise ResponseValidationError, so a partially valid result is never returned
"""

from urllib.parse import urlparse

from homecalc.core.catalog import CalculatorCatalog
from homecalc.core.errors import ErrorContext, ResponseValidationError
from homecalc.schemas.flows import (
    AssistantOutput,
    AssistantResult,
    CompletionOutput,
    CompletionRequest,
    CompletionResult,
    RecommendationOutput,
    RecommendationResult,
)

_INTERNAL_PATH_PREFIX = "/calculators/"


def is_external_url(link: str) -> bool:
    parsed = urlparse(link)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def normalize_recommendations(
    output: RecommendationOutput,
    catalog: CalculatorCatalog,
    context: ErrorContext | None = None,
) -> RecommendationResult:
    names: list[str] = []
    for raw in output.recommendations:
        name = raw.strip()
        if name and name not in names:
            names.append(name)

    for i, name in enumerate(names):
        if not catalog.has_name(name):
            raise ResponseValidationError(
                f"Recommended calculator '{name}' is not in the catalog",
                field=f"recommendations.{i}", context=context,
            )
    return RecommendationResult(recommendations=names)


def normalize_assistant(
    output: AssistantOutput,
    catalog: CalculatorCatalog,
    context: ErrorContext | None = None,
) -> AssistantResult:
    answer = output.answer.strip()
    if not answer:
        raise ResponseValidationError(
            "Assistant answer is empty", field="answer", context=context,
        )

    link = (output.link or "").strip() or None
    if link is not None and not is_external_url(link):
        if link.startswith(_INTERNAL_PATH_PREFIX):
            link = link[len(_INTERNAL_PATH_PREFIX):].strip("/")
        if not catalog.has_slug(link):
            raise ResponseValidationError(
                f"Link '{link}' is neither an external URL nor a calculator slug",
                field="link", context=context,
            )
    return AssistantResult(answer=answer, link=link)


def normalize_completion(
    output: CompletionOutput,
    request: CompletionRequest,
    context: ErrorContext | None = None,
) -> CompletionResult:
    filled: dict[str, str] = {}
    for key, value in (output.filled_values or {}).items():
        if key not in request.known_parameters:
            raise ResponseValidationError(
                f"Filled value for undeclared parameter '{key}'",
                field=f"filledValues.{key}", context=context,
            )
        text = _format_value(value)
        # user input wins over estimates
        if text and not request.known_parameters[key].strip():
            filled[key] = text

    guidance = (output.guidance or "").strip() or None
    return CompletionResult(filled_values=filled or None, guidance=guidance)


def _format_value(value: str | int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
