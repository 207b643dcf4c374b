"""
/api/subscribe endpoint for the newsletter.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ValidationError

from ..models.catalog import Subscriber, SubscriberCreate
from ..services.catalog_repository import (
    CatalogRepository,
    DuplicateRecordError,
    get_catalog_repository,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api")


class SubscribeRequest(BaseModel):
    """Raw body; the address is validated in the handler so a bad one maps to 400."""
    email: Any = None


class SubscribeResponse(BaseModel):
    message: str
    subscriber: Subscriber


@router.post("/subscribe", response_model=SubscribeResponse, status_code=201)
async def subscribe(
    request: SubscribeRequest,
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> SubscribeResponse:
    """
    Add an email address to the newsletter.

    Invalid addresses are rejected before anything is written.
    """
    try:
        data = SubscriberCreate(
            email=request.email.strip() if isinstance(request.email, str) else request.email,
            subscribed_at=datetime.now(timezone.utc).isoformat(),
        )
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid email address") from None

    try:
        subscriber = repo.create_subscriber(data)
    except DuplicateRecordError:
        logger.info(f"Duplicate subscription ignored for {data.email}")
        raise HTTPException(status_code=409, detail="Email already subscribed") from None
    except Exception as e:
        logger.error(f"Error storing subscriber: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to subscribe")

    logger.info(f"New subscriber id={subscriber.id}")
    return SubscribeResponse(message="Successfully subscribed", subscriber=subscriber)
