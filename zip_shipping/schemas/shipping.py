"""
Shipping Schemas

Pydantic models for the postcode-restricted rate API requests and responses.
"""
from typing import Optional, List, Union
from pydantic import BaseModel, Field, field_validator

from zip_shipping.core.config import settings


# ==================== Settings Schemas ====================


class MethodSettings(BaseModel):
    """Method settings as the host stores them."""
    enabled: Union[bool, str] = "yes"
    title: str = Field(default_factory=lambda: settings.ZIP_SHIPPING_DEFAULT_TITLE, max_length=100)
    cost: str = Field(default_factory=lambda: settings.ZIP_SHIPPING_DEFAULT_COST, max_length=32)
    allowed_zips: str = ""

    @field_validator("cost", mode="before")
    @classmethod
    def coerce_cost(cls, v):
        # Hosts may post numbers; the cost is kept as text
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class MethodSettingsResponse(BaseModel):
    """Cleaned settings ready to be saved."""
    enabled: str
    title: str
    cost: str
    allowed_zips: str


# ==================== Rate Schemas ====================


class RateQuoteRequest(BaseModel):
    """Request rates for one destination."""
    settings: MethodSettings = Field(default_factory=MethodSettings)
    destination_postcode: Optional[str] = Field(None, max_length=32)
    instance_id: int = Field(0, ge=0)


class RateOfferResponse(BaseModel):
    """One shipping rate offer."""
    id: str
    label: str
    cost: str
    calc_tax: str
    matched_pattern: Optional[str] = None


class RateQuoteResponse(BaseModel):
    """Offers for the destination (empty when the method does not apply)."""
    destination_postcode: str
    rates: List[RateOfferResponse] = []


class MethodListResponse(BaseModel):
    """Registered shipping method ids."""
    methods: List[str]
