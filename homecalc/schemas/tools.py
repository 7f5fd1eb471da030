"""Tool Schemas: input and result shapes for tools the model may call.

Invariants:
    - Lookup arguments are stripped; blank service or location is rejected,
      so a lookup never runs without a real location
"""

from pydantic import Field, field_validator

from homecalc.schemas.base import WireModel


class ProviderLookupInput(WireModel):
    service: str = Field(
        min_length=1, max_length=100,
        description='Type of professional, e.g. "plumber", "painter", "hvac contractor".',
    )
    location: str = Field(
        min_length=1, max_length=200,
        description='City and state to search in, e.g. "Austin, TX".',
    )

    @field_validator("service", "location")
    @classmethod
    def strip_argument(cls, v: str, info) -> str:
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v


class ServiceProvider(WireModel):
    name: str = Field(min_length=1)
    rating: float = Field(ge=0.0, le=5.0)
    review_count: int = Field(ge=0)
    address: str
