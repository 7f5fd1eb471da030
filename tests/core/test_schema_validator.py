"""Schema Validator tests: first-violation reporting and idempotence.

Tests cover:
    - Valid mappings and model instances pass through
    - Re-validating a validated instance yields an equal instance
    - First violated field is named with a dotted path
    - Non-object candidates and unknown fields are rejected
"""

import pytest

from homecalc.core.errors import ErrorContext, RequestValidationError, ResponseValidationError
from homecalc.core.schema_validator import validate_request, validate_response
from homecalc.schemas.flows import AssistantRequest, CompletionOutput, RecommendationOutput


def test_valid_mapping_is_typed():
    req = validate_request(AssistantRequest, {
        "query": " How much paint? ",
        "history": [{"role": "user", "content": "hi"}],
    })
    assert req.query == "How much paint?"
    assert req.history[0].content == "hi"
    assert req.location is None


def test_revalidation_is_idempotent():
    first = validate_request(AssistantRequest, {"query": "q", "location": "Austin, TX"})
    second = validate_request(AssistantRequest, first)
    assert second == first


def test_first_violation_path_is_dotted():
    with pytest.raises(RequestValidationError) as exc:
        validate_request(AssistantRequest, {
            "query": "q", "history": [{"role": "user", "content": "ok"}, {"role": "bot", "content": "x"}],
        })
    assert exc.value.field == "history.1.role"
    assert exc.value.http_status == 400


def test_unknown_field_rejected():
    with pytest.raises(ResponseValidationError) as exc:
        validate_response(RecommendationOutput, {"recommendations": [], "reasoning": "x"})
    assert exc.value.field == "reasoning"


def test_non_object_candidate_rejected():
    with pytest.raises(ResponseValidationError) as exc:
        validate_response(RecommendationOutput, ["Tile Calculator"])
    assert exc.value.field == "$"


def test_wrong_value_type_in_output():
    with pytest.raises(ResponseValidationError) as exc:
        validate_response(CompletionOutput, {"filledValues": {"area": [1, 2]}})
    assert exc.value.field.startswith("filledValues.area")


def test_context_carries_field_and_flow():
    ctx = ErrorContext(flow="recommendation")
    with pytest.raises(RequestValidationError) as exc:
        validate_request(AssistantRequest, {}, ctx)
    assert exc.value.context is ctx
    assert ctx.field == "query"
