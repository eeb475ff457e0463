# =============================================================================
# core/models/contact_us.py - Contact Request Schemas
# =============================================================================
# These models define the API contract for contact requests:
# - RequesterInfo: Who is asking (nested in every request)
# - ContactUsCreate: Validated input for creating/replacing a request
# - ContactUsRecord: A stored request, with its generated id
# - FieldError: One violated field in a rejected body
#
# The API speaks camelCase (talkAbout, phoneNumber); the database uses
# snake_case columns. Aliases bridge the two.
# =============================================================================

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

# Empty strings are rejected like missing ones
NonEmptyStr = Annotated[str, Field(min_length=1)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class RequesterInfo(_CamelModel):
    """
    Contact details of the person filing the request.

    Example:
        {
            "name": "Jane Doe",
            "companyName": "Acme",
            "email": "jane@example.com",
            "phoneNumber": "+1 555 0100"
        }
    """

    name: NonEmptyStr = Field(..., description="Requester's name")
    company_name: NonEmptyStr | None = Field(default=None, description="Company the requester represents")
    email: EmailStr = Field(..., description="Reply-to email address")
    phone_number: NonEmptyStr | None = Field(default=None, description="Optional phone number")


class ContactUsCreate(_CamelModel):
    """
    Schema for creating a contact request.

    All top-level fields are free-form text and required. Unknown fields
    (including `id`) are rejected.
    """

    talk_about: NonEmptyStr = Field(..., description="What the requester wants to talk about")
    time_frame: NonEmptyStr = Field(..., description="Expected time frame")
    project_type: NonEmptyStr = Field(..., description="Kind of project")
    budget: NonEmptyStr = Field(..., description="Budget range")
    description: NonEmptyStr = Field(..., description="Free-text description")
    requester: RequesterInfo

    def to_row(self) -> dict[str, Any]:
        """Column values for the database (snake_case, JSON-safe)."""
        return self.model_dump(mode="json")


class ContactUsRecord(ContactUsCreate):
    """
    A persisted contact request.

    Built from database rows (snake_case) and serialized with aliases
    (camelCase) for API responses.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="System-generated identifier")
    created_at: datetime | None = Field(default=None, description="When the request was filed")

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class FieldError(BaseModel):
    """
    One violated field.

    Example:
        {"field": "requester.email", "message": "value is not a valid email address", "type": "value_error"}
    """

    field: str
    message: str
    type: str

    @classmethod
    def from_pydantic(cls, error: dict[str, Any]) -> "FieldError":
        location = ".".join(str(part) for part in error.get("loc", ()))
        return cls(
            field=location or "body",
            message=error.get("msg", ""),
            type=error.get("type", ""),
        )
