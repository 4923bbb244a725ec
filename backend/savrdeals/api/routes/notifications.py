"""Outbound notification routes."""

import asyncio

import structlog
from fastapi import APIRouter, Depends, HTTPException

from savrdeals.core.exceptions import MailConfigurationError, MailDeliveryError
from savrdeals.notifications.mailer import DealLiveMailer, get_mailer
from savrdeals.schemas.notifications import DealLiveEmailRequest, DealLiveEmailResponse

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/send-email", response_model=DealLiveEmailResponse)
async def send_deal_live_email(
    request: DealLiveEmailRequest,
    mailer: DealLiveMailer = Depends(get_mailer),
) -> DealLiveEmailResponse:
    """Tell a user that the deal they requested is now live."""
    try:
        await asyncio.to_thread(mailer.send_deal_live, request.email, request.deal_name)
    except MailConfigurationError as e:
        logger.error("mail_not_configured", error=str(e))
        raise HTTPException(status_code=500, detail="Email is not configured")
    except MailDeliveryError:
        raise HTTPException(status_code=500, detail="Failed to send email")
    return DealLiveEmailResponse(success=True, message="Email sent successfully")
