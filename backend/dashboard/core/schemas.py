"""Base schema and error payload shared by every feature."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import ErrorCode


class CamelModel(BaseModel):
    """Immutable payload model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=True,
    )

    def to_json_dict(self) -> dict:
        """JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class ApiErrorPayload(CamelModel):
    """Structured error returned at the HTTP boundary instead of a raw exception."""

    ok: Literal[False] = False
    code: ErrorCode
    status: int = Field(..., ge=400, le=599)
    error: str
    details: Optional[str] = None
