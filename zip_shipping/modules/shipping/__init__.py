"""
Shipping Module

- PatternSet: postcode allow-list parsing
- RateEvaluator: match a destination and build the offer
- ShippingMethodFactory / register_method: host-facing method registry
"""
from zip_shipping.modules.shipping.patterns import AllowPattern, PatternKind, PatternSet
from zip_shipping.modules.shipping.evaluator import (
    MethodConfig,
    RateEvaluator,
    ShippingRateOffer,
    TaxMode,
    evaluate,
    normalize_postcode,
)
from zip_shipping.modules.shipping.methods import ShippingMethodFactory, get_method, register_method
from zip_shipping.modules.shipping.methods.base import BaseShippingMethod

__all__ = [
    "AllowPattern",
    "PatternKind",
    "PatternSet",
    "MethodConfig",
    "RateEvaluator",
    "ShippingRateOffer",
    "TaxMode",
    "evaluate",
    "normalize_postcode",
    "ShippingMethodFactory",
    "get_method",
    "register_method",
    "BaseShippingMethod",
]
