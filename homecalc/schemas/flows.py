"""Flow Schemas: request and result shapes for the three AI operations.

Invariants:
    - Requests strip surrounding whitespace; required text fields are non-empty
    - Results are what callers receive, after validation and normalization
    - *Output models are what the model must emit through submit_result;
      they are looser than results (e.g. numeric filled values) and are
      tightened by the normalizer

Design Decisions:
    - Separate Output and Result models: the model-facing schema is part of the
      prompt contract, the result is the API contract
"""

from typing import Any

from pydantic import Field, field_validator

from homecalc.core.domain_types import Role, UnitSystem
from homecalc.schemas.base import WireModel


# ─── Recommendation ─────────────────────────────────────────────

class RecommendationRequest(WireModel):
    project_description: str = Field(
        min_length=1, max_length=4000,
        description="What the user is working on, in their own words.",
    )

    @field_validator("project_description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("projectDescription cannot be empty or whitespace")
        return v


class RecommendationOutput(WireModel):
    recommendations: list[str] = Field(
        default_factory=list,
        description=(
            "Exact names of relevant calculators from the provided list. "
            "Empty when nothing is relevant."
        ),
    )


class RecommendationResult(WireModel):
    recommendations: list[str] = Field(default_factory=list)


# ─── Assistant ──────────────────────────────────────────────────

class ConversationMessage(WireModel):
    role: Role
    content: str = Field(max_length=8000)


class AssistantRequest(WireModel):
    query: str = Field(min_length=1, max_length=4000)
    history: list[ConversationMessage] = Field(default_factory=list)
    location: str | None = Field(default=None, max_length=200)

    @field_validator("query")
    @classmethod
    def strip_query(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("query cannot be empty or whitespace")
        return v

    @field_validator("location")
    @classmethod
    def blank_location_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class AssistantOutput(WireModel):
    answer: str = Field(
        min_length=1,
        description="Plain-text reply to the user. No Markdown links.",
    )
    link: str | None = Field(
        default=None,
        description=(
            "A calculator slug from the provided list, or a full https:// URL "
            "to an external resource. Omit when no resource applies."
        ),
    )


class AssistantResult(WireModel):
    answer: str
    link: str | None = None


# ─── Parameter completion ───────────────────────────────────────

class CompletionRequest(WireModel):
    calculator_name: str = Field(min_length=1, max_length=200)
    known_parameters: dict[str, str] = Field(min_length=1, max_length=50)
    units: UnitSystem | None = None

    @field_validator("calculator_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("calculatorName cannot be empty or whitespace")
        return v

    @field_validator("known_parameters", mode="before")
    @classmethod
    def stringify_values(cls, v: Any) -> Any:
        """Form values arrive as strings, numbers or booleans; keep them as text.

        Unset non-string values (None, false, 0) count as blank and get
        estimated; true becomes "true".
        """
        if not isinstance(v, dict):
            return v
        coerced = {}
        for key, val in v.items():
            if isinstance(val, str):
                coerced[key] = val
            elif val is None or isinstance(val, (bool, int, float)):
                if not val:
                    coerced[key] = ""
                else:
                    coerced[key] = "true" if val is True else str(val)
            else:
                coerced[key] = val
        return coerced


class CompletionOutput(WireModel):
    filled_values: dict[str, str | int | float] | None = Field(
        default=None,
        description=(
            "Estimates for the parameters the user left blank, keyed by the "
            "exact parameter name."
        ),
    )
    guidance: str | None = Field(
        default=None,
        description="One or two sentences of actionable advice.",
    )


class CompletionResult(WireModel):
    filled_values: dict[str, str] | None = None
    guidance: str | None = None
