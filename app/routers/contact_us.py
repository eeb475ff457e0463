# =============================================================================
# app/routers/contact_us.py - Contact Request CRUD Endpoints
# =============================================================================
# Mounted under CONTACT_US_PREFIX (default /contact-us).
#
#   GET    /               list / search (?_id=, ?text=)
#   GET    /item/{id}      single request (cached)
#   GET    /count          number of requests
#   GET    /pagination     one page (?page=, ?row=)
#   POST   /               create
#   PUT    /{id}           full or partial update
#   DELETE /{id}           delete one
#   DELETE /               delete selected ({"selected": [ids]})
# =============================================================================

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path, Query, status
from pydantic import BaseModel, Field

from app.auth import require_user
from app.config import settings
from app.dependencies import ContactUsServiceDep
from lib.pagination import DEFAULT_PAGE, coerce_positive_int

router = APIRouter(dependencies=[Depends(require_user)])

DATA_OBTAINED = "Data obtained."


# =============================================================================
# Request/Response Models
# =============================================================================

class DataResponse(BaseModel):
    """Envelope for read endpoints."""
    data: Any
    message: str = Field(default=DATA_OBTAINED)


class PaginationResponse(BaseModel):
    """One page of contact requests plus the overall total."""
    data: list[dict[str, Any]]
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    row: int = Field(..., ge=1)
    totalPages: int = Field(..., ge=0)
    message: str = Field(default=DATA_OBTAINED)


class MessageResponse(BaseModel):
    """Confirmation for write endpoints."""
    message: str


class BulkDeleteRequest(BaseModel):
    """Ids to remove in one call."""
    selected: list[UUID] = Field(
        default_factory=list,
        description="Ids of the contact requests to delete"
    )

    model_config = {
        "json_schema_extra": {
            "example": {"selected": ["550e8400-e29b-41d4-a716-446655440000"]}
        }
    }


RecordId = Annotated[UUID, Path(description="Contact request id")]


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/", response_model=DataResponse)
async def list_contact_requests(
    service: ContactUsServiceDep,
    record_id: Annotated[UUID | None, Query(alias="_id", description="Exact id match")] = None,
    text: Annotated[str | None, Query(description="Case-insensitive text search")] = None,
):
    """
    List contact requests.

    Filters by exact id and/or free text; returns everything without filters.
    """
    records = await service.list_requests(record_id=record_id, text=text)
    return DataResponse(data=[record.to_response() for record in records])


@router.get("/item/{record_id}", response_model=DataResponse)
async def get_contact_request(record_id: RecordId, service: ContactUsServiceDep):
    """
    Get a single contact request.

    Served from a short-lived cache; responds 404 if the id is unknown.
    """
    record = await service.get_request(record_id)
    return DataResponse(data=record.to_response())


@router.get("/count", response_model=DataResponse)
async def count_contact_requests(service: ContactUsServiceDep):
    """Total number of contact requests."""
    return DataResponse(data=await service.count_requests())


@router.get("/pagination", response_model=PaginationResponse)
async def paginate_contact_requests(
    service: ContactUsServiceDep,
    page: Annotated[str | None, Query(description="Page number, 1-indexed")] = None,
    row: Annotated[str | None, Query(description="Rows per page")] = None,
):
    """
    Get one page of contact requests.

    Missing or non-numeric parameters fall back to page 1 and the default
    page size. Pages past the end are empty.
    """
    records, window = await service.paginate_requests(
        page=coerce_positive_int(page, DEFAULT_PAGE),
        rows_per_page=coerce_positive_int(row, settings.PAGINATION_DEFAULT_ROWS),
    )
    return PaginationResponse(
        data=[record.to_response() for record in records],
        total=window.total,
        page=window.page,
        row=window.rows_per_page,
        totalPages=window.total_pages,
    )


@router.post("/", response_model=DataResponse, status_code=status.HTTP_201_CREATED)
async def create_contact_request(
    service: ContactUsServiceDep,
    payload: Annotated[Any, Body()] = None,
):
    """
    Create a contact request.

    The body is validated in full; every invalid field is reported with 422.
    """
    record = await service.create_request(payload)
    return DataResponse(data=record.to_response(), message="ContactUs created")


@router.put("/{record_id}", response_model=MessageResponse)
async def update_contact_request(
    record_id: RecordId,
    service: ContactUsServiceDep,
    payload: Annotated[Any, Body()] = None,
):
    """
    Update a contact request.

    Accepts a partial body; the merged result must still be valid.
    Unknown ids are ignored.
    """
    await service.update_request(record_id, payload if payload is not None else {})
    return MessageResponse(message="ContactUs updated")


@router.delete("/{record_id}", response_model=MessageResponse)
async def delete_contact_request(record_id: RecordId, service: ContactUsServiceDep):
    """Delete a contact request. Unknown ids are ignored."""
    await service.delete_request(record_id)
    return MessageResponse(message="ContactUs deleted")


@router.delete("/", response_model=MessageResponse)
async def delete_selected_contact_requests(
    request: BulkDeleteRequest,
    service: ContactUsServiceDep,
):
    """Delete every contact request listed in `selected`."""
    await service.delete_requests(request.selected)
    return MessageResponse(message="ContactUs deleted")
