"""
Shipping API Routes

Provides endpoints for:
- Rate quoting (offers for a destination postcode)
- Settings validation (before the host saves them)
- Method listing (registered method ids)
"""
import logging

from fastapi import APIRouter, HTTPException, status

from zip_shipping.core.config import settings
from zip_shipping.core.exceptions import ShippingConfigError
from zip_shipping.modules.shipping.evaluator import ShippingRateOffer, normalize_postcode
from zip_shipping.modules.shipping.methods import ShippingMethodFactory
from zip_shipping.modules.shipping.methods.zip_restricted import ZipRestrictedShipping
from zip_shipping.schemas.shipping import (
    MethodListResponse,
    MethodSettings,
    MethodSettingsResponse,
    RateOfferResponse,
    RateQuoteRequest,
    RateQuoteResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shipping", tags=["shipping"])


# ==================== Helper Functions ====================


def offer_to_response(offer: ShippingRateOffer) -> RateOfferResponse:
    """Convert an offer to its API response."""
    rate = offer.to_rate()
    return RateOfferResponse(
        id=rate["id"],
        label=rate["label"],
        cost=rate["cost"],
        calc_tax=rate["calc_tax"],
        matched_pattern=offer.matched_pattern.raw if offer.matched_pattern else None,
    )


# ==================== Rate Endpoints ====================


@router.post("/zip-rates", response_model=RateQuoteResponse)
def quote_zip_rates(request: RateQuoteRequest):
    """
    Get the postcode-restricted rate for a destination.

    Returns an empty rate list when the method is disabled or the postcode
    is not allowed.
    """
    method = ShippingMethodFactory.get_method(
        settings.ZIP_SHIPPING_METHOD_ID,
        request.settings.model_dump(),
        instance_id=request.instance_id,
    )
    if method is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shipping method {settings.ZIP_SHIPPING_METHOD_ID} is not available",
        )

    package = {"destination": {"postcode": request.destination_postcode or ""}}
    offers = method.calculate_shipping(package)

    return RateQuoteResponse(
        destination_postcode=normalize_postcode(request.destination_postcode),
        rates=[offer_to_response(offer) for offer in offers],
    )


# ==================== Settings Endpoints ====================


@router.post("/zip-rates/settings", response_model=MethodSettingsResponse)
def validate_zip_rate_settings(body: MethodSettings):
    """Validate and clean method settings before the host saves them."""
    try:
        cleaned = ZipRestrictedShipping.validate_settings(body.model_dump())
    except ShippingConfigError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.to_dict(),
        )
    return MethodSettingsResponse(**cleaned)


@router.get("/methods", response_model=MethodListResponse)
def list_methods():
    """List registered shipping method ids."""
    return MethodListResponse(methods=ShippingMethodFactory.get_registered_methods())
