"""
Contact form endpoint.

Endpoints:
- POST /api/contact - Store a message and acknowledge it by email
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from modion.adapters.sqlite.repos import SQLiteContactRepo
from modion.api.deps import get_contact_repo, get_email_adapter
from modion.api.schemas import MessageResponse
from modion.components.contact import ContactInput, run
from modion.core.ports.email import EmailPort

logger = logging.getLogger(__name__)

router = APIRouter()


class ContactRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    subject: str | None = None
    message: str | None = None


@router.post("", response_model=MessageResponse)
def submit_contact(
    request_body: ContactRequest,
    repo: SQLiteContactRepo = Depends(get_contact_repo),
    email_sender: EmailPort = Depends(get_email_adapter),
) -> MessageResponse:
    inp = ContactInput(
        name=request_body.name,
        email=request_body.email,
        subject=request_body.subject,
        message=request_body.message,
    )
    result = run(inp, repo=repo, email_sender=email_sender)

    if not result.success:
        if result.code in ("missing_fields", "invalid_email"):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
        logger.error("Contact submission failed: %s", result.error)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Something went wrong. Try again later.",
        )

    return MessageResponse(message="Message received and email sent.")
