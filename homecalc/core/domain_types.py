"""Domain Types: enums shared by schemas, prompts and the catalog.

Invariants:
    - All valid states encoded as Enums, no raw string matching
    - str Enums serialize to JSON without custom encoders
"""

from enum import Enum


class CalculatorCategory(str, Enum):
    """Catalog sections, in display order."""
    HVAC = "HVAC"
    HOME_IMPROVEMENT = "Home Improvement"
    GARDENING = "Gardening"
    OTHER = "Other"


class Role(str, Enum):
    """Speaker of a conversation turn."""
    USER = "user"
    MODEL = "model"


class UnitSystem(str, Enum):
    """Unit system the user has selected on a calculator form."""
    IMPERIAL = "imperial"
    METRIC = "metric"


class FlowName(str, Enum):
    """The three orchestration flows; used in logs and error context."""
    RECOMMENDATION = "recommendation"
    ASSISTANT = "assistant"
    COMPLETION = "completion"
