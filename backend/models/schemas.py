"""Pydantic schemas for the webhook and the AP3 merge API."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PERSON_ID_FIELD = "str::person_id"
ORTTO_ID_FIELD = "str:cm:orttoid"
MERGE_STRATEGY = 2


class IncomingWebhookPayload(BaseModel):
    """Contact notification sent by the campaign platform."""

    model_config = ConfigDict(extra="ignore")

    contact_id: str = Field(min_length=1, strict=True)
    campaign_id: str | None = None
    campaign_name: str | None = None
    email: str | None = None
    id: str | None = None
    run_id: str | None = None
    shape_id: str | None = None
    shape_title: str | None = None
    time: str | None = None
    webhook_id: str | None = None
    webhook_name: str | None = None


class PersonFields(BaseModel):
    """Identifier fields of a single person record."""

    model_config = ConfigDict(populate_by_name=True)

    person_id: str = Field(alias=PERSON_ID_FIELD)
    ortto_id: str = Field(alias=ORTTO_ID_FIELD)


class Person(BaseModel):
    fields: PersonFields


class MergeRequest(BaseModel):
    """Body of ``POST /v1/person/merge``."""

    people: list[Person]
    merge_by: list[str] = Field(default_factory=lambda: [PERSON_ID_FIELD])
    merge_strategy: int = MERGE_STRATEGY

    @classmethod
    def for_contact(cls, contact_id: str) -> "MergeRequest":
        """Merge request keyed on ``contact_id`` under both identifier fields."""
        fields = PersonFields(person_id=contact_id, ortto_id=contact_id)
        return cls(people=[Person(fields=fields)])

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class AP3Response(BaseModel):
    """Downstream response with its body already decoded."""

    status_code: int
    reason: str = ""
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class ForwardSuccess(BaseModel):
    """Response returned when AP3 accepted the merge."""

    success: bool = True
    contact_id: str
    ap3_response: Any = None
    duration_ms: int = Field(ge=0)
