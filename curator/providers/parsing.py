"""Validation of reasoning-service replies."""

import json
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, TypeAdapter, ValidationError, field_validator

_DECODER = json.JSONDecoder()


class ResponseParseError(ValueError):
    """The reply does not contain a well-formed selection list."""


class ExternalSelection(BaseModel):
    """One selection as returned by the reasoning service."""

    id: str = Field(..., description="Candidate id")
    selection_score: float = Field(..., description="Score on the provider's scale", ge=0.0)
    target_section: str = Field(..., description="Section label", min_length=1)
    selection_reason: Optional[str] = Field(None, description="Rationale")
    ai_summary: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("ai_summary", "claude_summary", "summary"),
        description="One-sentence summary",
    )
    confidence_level: Optional[float] = Field(None, ge=0.0, le=1.0)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


_SELECTIONS = TypeAdapter(List[ExternalSelection])


def extract_json_array(text: str) -> List[Any]:
    """
    First JSON array of objects in a reply that may carry surrounding prose.

    Decoding is attempted at each `[` in turn, so bracketed prose such as
    echoed `[ID: ...]` labels or `[1]` footnotes is skipped. A list holding no
    objects, including `[]`, is only used when no list of objects is found.
    """
    text = text or ""
    first_list = None
    start = text.find("[")
    while start != -1:
        try:
            value, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, list):
            if any(isinstance(item, dict) for item in value):
                return value
            if first_list is None:
                first_list = value
        start = text.find("[", start + 1)

    if first_list is None:
        raise ResponseParseError("No JSON array found in response")
    return first_list


def parse_selections(text: str) -> List[ExternalSelection]:
    """
    Parse and validate the selection list in a reply.

    Raises:
        ResponseParseError: If no JSON array is present or any entry fails
            the schema
    """
    data = extract_json_array(text)

    try:
        return _SELECTIONS.validate_python(data)
    except ValidationError as e:
        raise ResponseParseError(f"Response failed schema validation: {e}") from e
