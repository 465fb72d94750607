"""
Contact form inbox routes.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from blogfolio.db import DbClient
from blogfolio.dependencies import get_db_client, require_admin
from blogfolio.errors import BadRequestError, NotFoundError
from blogfolio.query import CONTACT_LISTING, ListingParams, build_query, paginate
from blogfolio.records import ContactRecord, ContactStatus, UserRecord
from blogfolio.schemas import (
    ContactCreateRequest,
    ContactListResponse,
    ContactResponse,
    ContactStatusRequest,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

CONTACT_NOT_FOUND = "Contact message not found"
VALID_STATUSES = {status.value for status in ContactStatus}


def _contact_response(contact: ContactRecord) -> ContactResponse:
    return ContactResponse.model_validate(asdict(contact))


@router.post("", response_model=MessageResponse)
@router.post("/", response_model=MessageResponse, include_in_schema=False)
def submit_contact(
    payload: ContactCreateRequest,
    request: Request,
    db: DbClient = Depends(get_db_client),
):
    contact = ContactRecord(
        name=payload.name,
        email=payload.email,
        subject=payload.subject,
        message=payload.message,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    db.create_contact(contact)
    logger.info("Contact message %s received", contact.id)
    return MessageResponse(message="Message sent successfully")


@router.get("", response_model=ContactListResponse)
@router.get("/", response_model=ContactListResponse, include_in_schema=False)
def list_contacts(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    _: UserRecord = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    query = build_query(
        ListingParams(page=page, limit=limit, status=status, search=search),
        CONTACT_LISTING,
    )
    contacts, total = db.list_contacts(query)
    result = paginate([_contact_response(c) for c in contacts], total, query)
    return ContactListResponse(
        contacts=result.items,
        current_page=result.current_page,
        total_pages=result.total_pages,
        total_contacts=result.total_count,
    )


@router.get("/{contact_id}", response_model=ContactResponse)
def get_contact(
    contact_id: str,
    _: UserRecord = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    contact = db.get_contact(contact_id)
    if not contact:
        raise NotFoundError(CONTACT_NOT_FOUND)
    return _contact_response(contact)


@router.put("/{contact_id}/status", response_model=ContactResponse)
def update_contact_status(
    contact_id: str,
    payload: ContactStatusRequest,
    _: UserRecord = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    if payload.status not in VALID_STATUSES:
        raise BadRequestError("Invalid status")
    contact = db.update_contact(contact_id, {"status": payload.status})
    if not contact:
        raise NotFoundError(CONTACT_NOT_FOUND)
    return _contact_response(contact)


@router.delete("/{contact_id}", response_model=MessageResponse)
def delete_contact(
    contact_id: str,
    _: UserRecord = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    if not db.delete_contact(contact_id):
        raise NotFoundError(CONTACT_NOT_FOUND)
    return MessageResponse(message="Contact message removed")
