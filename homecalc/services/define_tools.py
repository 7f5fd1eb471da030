"""Tool Schemas: Anthropic tool-use definitions declared to the model.

Invariants:
    - submit_result is the terminal tool: its input_schema is the flow's output
      schema, so calling it is how the model delivers structured output
    - Every other tool is executed by ToolDispatch and continues the loop
"""

from pydantic import BaseModel

from homecalc.core.prompts import PROVIDER_TOOL_NAME, SUBMIT_TOOL_NAME
from homecalc.schemas.tools import ProviderLookupInput

PROVIDER_LOOKUP_TOOL = {
    "name": PROVIDER_TOOL_NAME,
    "description": (
        "Find highly rated local service providers (plumbers, painters, "
        "electricians, HVAC contractors, ...) in a city. Only call this when "
        "the user asked for a professional AND a location is known. Returns a "
        "list of providers with name, rating, reviewCount and address."
    ),
    "input_schema": ProviderLookupInput.model_json_schema(by_alias=True),
}


def submit_result_tool(output_model: type[BaseModel]) -> dict:
    """Terminal tool whose input is the flow's structured answer."""
    return {
        "name": SUBMIT_TOOL_NAME,
        "description": (
            "Deliver your final answer. Call this exactly once, when you are "
            "done. The input must match the schema exactly."
        ),
        "input_schema": output_model.model_json_schema(by_alias=True),
    }
