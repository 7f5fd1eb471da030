"""Parameter-Completion Flow: subset invariant, user input wins, guidance.

Tests cover:
    - Only blank parameters are filled; numeric estimates become strings
    - Keys outside knownParameters fail the flow
    - Guidance returned even when nothing was filled
    - Units and parameter lists rendered into the prompt
"""

import pytest

from homecalc.core.errors import RequestValidationError, ResponseValidationError
from homecalc.schemas.flows import CompletionResult
from homecalc.services.handle_completion import CompletionHandler

from tests.services.mock_anthropic import MockAnthropicClient, submit_response

PAINT_PARAMS = {"roomLength": "12", "roomWidth": "", "wallHeight": "", "coats": "2"}


def _handler(make_invoker, client):
    return CompletionHandler(make_invoker(client))


async def test_fills_blank_parameters_as_strings(make_invoker):
    client = MockAnthropicClient([submit_response({
        "filledValues": {"roomWidth": 10, "wallHeight": 8.0},
        "guidance": "Measure wall height from floor to ceiling.",
    })])
    result = await _handler(make_invoker, client).get_ai_assistance({
        "calculatorName": "Paint Coverage Calculator",
        "knownParameters": PAINT_PARAMS,
    })

    assert result.filled_values == {"roomWidth": "10", "wallHeight": "8"}
    assert set(result.filled_values) <= set(PAINT_PARAMS)
    assert result.guidance.startswith("Measure")


async def test_undeclared_parameter_fails_the_flow(make_invoker):
    client = MockAnthropicClient([submit_response({
        "filledValues": {"roomWidth": "10", "ceilingType": "flat"},
    })])
    with pytest.raises(ResponseValidationError) as exc:
        await _handler(make_invoker, client).get_ai_assistance({
            "calculatorName": "Paint Coverage Calculator",
            "knownParameters": PAINT_PARAMS,
        })
    assert exc.value.field == "filledValues.ceilingType"


async def test_user_values_are_never_overwritten(make_invoker):
    client = MockAnthropicClient([submit_response({
        "filledValues": {"roomLength": "15", "roomWidth": "10"},
    })])
    result = await _handler(make_invoker, client).get_ai_assistance({
        "calculatorName": "Paint Coverage Calculator",
        "knownParameters": PAINT_PARAMS,
    })
    assert result.filled_values == {"roomWidth": "10"}


async def test_guidance_only_when_everything_is_filled(make_invoker):
    client = MockAnthropicClient([submit_response({
        "filledValues": {},
        "guidance": "Add 10% for waste on patterned wallpaper.",
    })])
    result = await _handler(make_invoker, client).get_ai_assistance({
        "calculatorName": "Wallpaper Calculator",
        "knownParameters": {"wallWidth": "12", "wallHeight": "8"},
    })
    assert result == CompletionResult(
        filled_values=None, guidance="Add 10% for waste on patterned wallpaper.",
    )


async def test_empty_output_normalizes_to_absent_fields(make_invoker):
    client = MockAnthropicClient([submit_response({})])
    result = await _handler(make_invoker, client).get_ai_assistance({
        "calculatorName": "Wallpaper Calculator",
        "knownParameters": {"wallWidth": ""},
    })
    assert result.filled_values is None
    assert result.guidance is None


async def test_prompt_separates_filled_and_blank_parameters(make_invoker):
    client = MockAnthropicClient([submit_response({"guidance": "ok"})])
    await _handler(make_invoker, client).get_ai_assistance({
        "calculatorName": "Paint Coverage Calculator",
        "knownParameters": PAINT_PARAMS,
        "units": "metric",
    })
    call = client.calls[0]
    user = call["messages"][0]["content"]
    assert "metric unit system" in call["system"]
    assert "- roomLength: 12\n- coats: 2" in user
    assert "- roomWidth\n- wallHeight" in user


async def test_numeric_form_values_are_accepted(make_invoker):
    client = MockAnthropicClient([submit_response({"filledValues": {"rate": "6.5"}})])
    result = await _handler(make_invoker, client).get_ai_assistance({
        "calculatorName": "Mortgage Calculator",
        "knownParameters": {"principal": 300000, "rate": "", "termYears": 30},
    })
    assert result.filled_values == {"rate": "6.5"}
    user = client.calls[0]["messages"][0]["content"]
    assert "- principal: 300000" in user


@pytest.mark.parametrize("body", [
    {"calculatorName": "", "knownParameters": {"a": ""}},
    {"calculatorName": "Tile Calculator", "knownParameters": {}},
    {"calculatorName": "Tile Calculator", "knownParameters": {"a": ""}, "units": "cubits"},
])
async def test_invalid_request_fails_without_model_call(make_invoker, body):
    client = MockAnthropicClient([])
    with pytest.raises(RequestValidationError):
        await _handler(make_invoker, client).get_ai_assistance(body)
    assert client.calls == []


async def test_unset_form_values_are_treated_as_blank(make_invoker):
    client = MockAnthropicClient([submit_response({"filledValues": {"length": "12"}})])
    result = await _handler(make_invoker, client).get_ai_assistance({
        "calculatorName": "Concrete Slab Calculator",
        "knownParameters": {"length": 0, "sealed": False, "reinforced": True, "depth": None},
    })
    user = client.calls[0]["messages"][0]["content"]
    assert "<filled_parameters>\n- reinforced: true\n</filled_parameters>" in user
    assert "<blank_parameters>\n- length\n- sealed\n- depth\n</blank_parameters>" in user
    assert result.filled_values == {"length": "12"}
