"""
Newsletter subscription endpoint.

Endpoints:
- POST /api/subscribe - Subscribe an email address
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from modion.adapters.sqlite.repos import SQLiteSubscriberRepo
from modion.api.deps import get_email_adapter, get_subscriber_repo
from modion.api.schemas import MessageResponse
from modion.components.newsletter import SubscribeInput, run
from modion.core.ports.email import EmailPort

logger = logging.getLogger(__name__)

router = APIRouter()


class SubscribeRequest(BaseModel):
    email: str | None = None


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def subscribe(
    request_body: SubscribeRequest,
    repo: SQLiteSubscriberRepo = Depends(get_subscriber_repo),
    email_sender: EmailPort = Depends(get_email_adapter),
) -> MessageResponse:
    result = run(SubscribeInput(email=request_body.email), repo=repo, email_sender=email_sender)

    if not result.success:
        for error in result.errors:
            if error.code in ("EMPTY_EMAIL", "INVALID_FORMAT", "EMAIL_TOO_LONG"):
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
            if error.code == "ALREADY_SUBSCRIBED":
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=error.message)

        logger.error("Subscription failed: %s", [e.message for e in result.errors])
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Something went wrong",
        )

    return MessageResponse(message="Subscription successful!")
