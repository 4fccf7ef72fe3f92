"""
Postcode-Restricted Rate Evaluator

Decides whether a destination postcode qualifies for the method and, if it
does, builds the priced offer handed back to the host.

evaluate() is a total function: it never raises for data-shape reasons.
A disabled method, an empty allow-list, or a postcode that matches nothing
all yield None. The configured cost is forwarded verbatim; it is validated
when settings are saved, not here.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from zip_shipping.core.config import settings
from zip_shipping.modules.shipping.patterns import AllowPattern, PatternSet, strip_whitespace

logger = logging.getLogger(__name__)

# Host settings store checkboxes as "yes"/"no"
TRUTHY_FLAGS = {"yes", "true", "1", "on"}


class TaxMode(str, enum.Enum):
    """Tax calculation mode flagged on the offer. Tax itself is host-owned."""
    PER_ITEM = "per_item"


def parse_flag(value: Any) -> bool:
    """Convert a host checkbox value ("yes"/"no", bool, None) to bool."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY_FLAGS


def normalize_postcode(postcode: Optional[Any]) -> str:
    """Trim and drop all whitespace: " 110 00 " -> "11000"."""
    return strip_whitespace(postcode)


@dataclass(frozen=True)
class MethodConfig:
    """Typed view of the method's settings. Read-only to the evaluator."""
    enabled: bool
    title: str
    cost: str
    allowed_zips_raw: str = ""

    @classmethod
    def from_settings(cls, options: Mapping[str, Any]) -> "MethodConfig":
        """
        Build from the host's string-typed settings blob.

        Missing keys fall back to the configured defaults.
        """
        cost = options.get("cost")
        return cls(
            enabled=parse_flag(options.get("enabled", "yes")),
            title=str(options.get("title") or settings.ZIP_SHIPPING_DEFAULT_TITLE),
            cost=settings.ZIP_SHIPPING_DEFAULT_COST if cost is None else str(cost),
            allowed_zips_raw=str(options.get("allowed_zips") or ""),
        )


@dataclass(frozen=True)
class ShippingRateOffer:
    """Priced offer for a qualifying destination."""
    identifier: str
    label: str
    cost: str
    tax_mode: TaxMode = TaxMode.PER_ITEM
    matched_pattern: Optional[AllowPattern] = None

    def to_rate(self) -> Dict[str, str]:
        """Rate record in the shape the host's rate list expects."""
        return {
            "id": self.identifier,
            "label": self.label,
            "cost": self.cost,
            "calc_tax": self.tax_mode.value,
        }


class RateEvaluator:
    """
    Evaluates destinations for one shipping method id.

    Holds no mutable state; one instance can be shared across threads.
    """

    def __init__(self, method_id: Optional[str] = None):
        self.method_id = method_id or settings.ZIP_SHIPPING_METHOD_ID

    def evaluate(
        self,
        destination_postcode: Optional[str],
        config: MethodConfig,
    ) -> Optional[ShippingRateOffer]:
        """
        Evaluate one destination against the method config.

        Args:
            destination_postcode: Raw postcode from the package destination
            config: Method settings

        Returns:
            ShippingRateOffer on a match, otherwise None
        """
        if not config.enabled:
            return None

        destination = normalize_postcode(destination_postcode)
        pattern = PatternSet.parse(config.allowed_zips_raw).match(destination)

        if pattern is None:
            logger.debug(f"No allow-pattern matched postcode {destination!r} for {self.method_id}")
            return None

        logger.debug(
            f"Postcode {destination!r} matched {pattern.kind.value} pattern {pattern.raw!r} for {self.method_id}"
        )
        return ShippingRateOffer(
            identifier=self.method_id,
            label=config.title,
            cost=config.cost,
            tax_mode=TaxMode.PER_ITEM,
            matched_pattern=pattern,
        )


def evaluate(
    destination_postcode: Optional[str],
    config: MethodConfig,
    method_id: Optional[str] = None,
) -> Optional[ShippingRateOffer]:
    """
    Convenience function to evaluate a destination.

    Equivalent to RateEvaluator(method_id).evaluate().
    """
    return RateEvaluator(method_id).evaluate(destination_postcode, config)
