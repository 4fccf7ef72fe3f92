"""
Postcode-Restricted Shipping Method

Host adapter for the rate evaluator:
- Registered under ZIP_SHIPPING_METHOD_ID
- Converts the host's string settings to a MethodConfig once
- Delegates matching and pricing to RateEvaluator
- Validates cost when settings are saved, never when rates are calculated
"""
import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from zip_shipping.core.config import settings
from zip_shipping.core.exceptions import InvalidCostFormatError
from zip_shipping.modules.shipping.evaluator import (
    MethodConfig,
    RateEvaluator,
    ShippingRateOffer,
    parse_flag,
)
from zip_shipping.modules.shipping.methods import register_method
from zip_shipping.modules.shipping.methods.base import BaseShippingMethod, SettingsField
from zip_shipping.modules.shipping.patterns import clear_pattern_cache

logger = logging.getLogger(__name__)

ALLOWED_ZIPS_PLACEHOLDER = "110 00\n2*\n350*"

# Plain decimal text: digits with an optional fractional part
_COST_FORMAT = re.compile(r"[0-9]+(\.[0-9]+)?")


def validate_cost(cost: Any) -> str:
    """
    Check a cost setting and return it trimmed.

    Blank means the default cost. Anything else must be a plain,
    non-negative decimal ("12", "12.50"); exponent, underscore and
    signed forms are rejected because the host reads the text as-is.

    Raises:
        InvalidCostFormatError: if the value is not a valid cost
    """
    text = "" if cost is None else str(cost).strip()
    if not text:
        return settings.ZIP_SHIPPING_DEFAULT_COST

    if text.startswith("-") and _COST_FORMAT.fullmatch(text[1:]):
        raise InvalidCostFormatError(f"Cost {text!r} must not be negative", cost=text)
    if not _COST_FORMAT.fullmatch(text):
        raise InvalidCostFormatError(f"Cost {text!r} is not a decimal number", cost=text)

    return text


@register_method(settings.ZIP_SHIPPING_METHOD_ID)
class ZipRestrictedShipping(BaseShippingMethod):
    """
    Shipping method available only for configured postcodes.

    Settings: enabled, title, cost, allowed_zips (one code per line,
    "*" as prefix wildcard).
    """

    supports = [
        "shipping-zones",
        "instance-settings",
        "instance-settings-modal",
    ]

    def __init__(self, options: Optional[Mapping[str, Any]] = None, instance_id: int = 0):
        super().__init__(options, instance_id=instance_id)
        # Offers carry the fixed method id; get_rate_id() is zone metadata for the host
        self._evaluator = RateEvaluator(self.method_id)

    @property
    def method_id(self) -> str:
        return settings.ZIP_SHIPPING_METHOD_ID

    @property
    def method_title(self) -> str:
        return "Postcode-restricted shipping"

    @property
    def method_description(self) -> str:
        return "Shipping method available only for specific postcodes."

    @property
    def form_fields(self) -> Dict[str, SettingsField]:
        return {
            "enabled": SettingsField(
                key="enabled",
                title="Enable",
                type="checkbox",
                label="Enable this shipping method",
                default="yes",
            ),
            "title": SettingsField(
                key="title",
                title="Title",
                type="text",
                description="Name the customer sees at checkout.",
                default=settings.ZIP_SHIPPING_DEFAULT_TITLE,
                desc_tip=True,
            ),
            "cost": SettingsField(
                key="cost",
                title="Cost",
                type="text",
                placeholder="0",
                description="Price of this shipping method.",
                default=settings.ZIP_SHIPPING_DEFAULT_COST,
                desc_tip=True,
            ),
            "allowed_zips": SettingsField(
                key="allowed_zips",
                title="Allowed postcodes",
                type="textarea",
                description=(
                    'Postcodes, one per line. Use an asterisk (*) as a wildcard, '
                    'e.g. "1*" allows every postcode starting with 1.'
                ),
                default="",
                placeholder=ALLOWED_ZIPS_PLACEHOLDER,
                desc_tip=True,
            ),
        }

    @property
    def config(self) -> MethodConfig:
        """Typed settings for the evaluator."""
        return MethodConfig.from_settings(self.get_options())

    def calculate_shipping(self, package: Optional[Mapping[str, Any]] = None) -> List[ShippingRateOffer]:
        """
        Return the offer for the package destination, if it qualifies.

        A package without a destination postcode is evaluated as "".
        """
        destination = (package or {}).get("destination") or {}
        postcode = destination.get("postcode")
        # Hosts may send numeric postcodes
        postcode = "" if postcode is None else str(postcode)

        offer = self._evaluator.evaluate(postcode, self.config)
        return [offer] if offer else []

    @classmethod
    def validate_settings(cls, options: Mapping[str, Any]) -> Dict[str, str]:
        """
        Clean settings before the host saves them.

        Args:
            options: Submitted settings

        Returns:
            Settings as the host stores them ("yes"/"no" flag, trimmed cost)

        Raises:
            InvalidCostFormatError: if cost is not a non-negative number
        """
        try:
            cost = validate_cost(options.get("cost"))
        except InvalidCostFormatError as e:
            logger.warning(f"Rejected shipping settings: {e.message}")
            raise

        title = str(options.get("title") or "").strip() or settings.ZIP_SHIPPING_DEFAULT_TITLE
        cleaned = {
            "enabled": "yes" if parse_flag(options.get("enabled", "yes")) else "no",
            "title": title,
            "cost": cost,
            "allowed_zips": str(options.get("allowed_zips") or ""),
        }
        # Saved text replaces the old allow-list
        clear_pattern_cache()
        return cleaned
