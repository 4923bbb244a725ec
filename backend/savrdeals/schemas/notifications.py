"""Pydantic schemas for outbound email requests."""

from pydantic import AliasChoices, BaseModel, Field


class DealLiveEmailRequest(BaseModel):
    """Accepts dealName as well, which is what the React client sends."""

    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    deal_name: str = Field(..., min_length=1, validation_alias=AliasChoices("deal_name", "dealName"))


class DealLiveEmailResponse(BaseModel):
    success: bool
    message: str
