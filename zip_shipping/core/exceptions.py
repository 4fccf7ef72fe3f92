"""
Zip Shipping Exception Hierarchy

Structured exception classes for the postcode-restricted shipping method.
All exceptions include code, message, and details for logging and for
returning structured errors to the host.

Exception Hierarchy:
    ZipShippingError
    └── ShippingError
        ├── ShippingConfigError
        │   └── InvalidCostFormatError
        └── UnknownShippingMethodError

Rate evaluation itself never raises. These errors belong to the
configuration boundary (saving settings) and to method lookup.
"""
import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class ZipShippingError(Exception):
    """
    Root of every error the shipping method can report to its host.

    Raised only at the configuration boundary (saving settings, looking up a
    method); rate evaluation returns None instead of raising.

    Attributes:
        message: Text shown to the admin who saved the settings
        code: Stable code the host can branch on (e.g. INVALID_COST_FORMAT)
        details: Offending field and value
        severity: P0-P3, P2 for admin input mistakes
    """

    default_code: str = "ZIP_SHIPPING_ERROR"
    default_severity: str = "P2"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[str] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        self.severity = severity or self.default_severity
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "severity": self.severity,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


# =============================================================================
# SHIPPING ERRORS
# =============================================================================

class ShippingError(ZipShippingError):
    """Base exception for shipping-related errors."""
    default_code = "SHIPPING_ERROR"
    default_severity = "P1"


class ShippingConfigError(ShippingError):
    """Method settings rejected at save time."""
    default_code = "SHIPPING_CONFIG_INVALID"
    default_severity = "P2"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details["field"] = field
        super().__init__(message, details=details, **kwargs)


class InvalidCostFormatError(ShippingConfigError):
    """Configured cost is not a non-negative decimal number."""
    default_code = "INVALID_COST_FORMAT"

    def __init__(
        self,
        message: str,
        cost: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details["cost"] = cost
        super().__init__(message, field="cost", details=details, **kwargs)


class UnknownShippingMethodError(ShippingError):
    """No shipping method registered under the requested id."""
    default_code = "SHIPPING_METHOD_NOT_FOUND"
    default_severity = "P2"

    def __init__(
        self,
        message: str,
        method_id: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details["method_id"] = method_id
        super().__init__(message, details=details, **kwargs)


# =============================================================================
# EXCEPTION CATALOG
# =============================================================================

EXCEPTION_CATALOG = {
    "SHIPPING_CONFIG_INVALID": {"class": ShippingConfigError, "severity": "P2"},
    "INVALID_COST_FORMAT": {"class": InvalidCostFormatError, "severity": "P2"},
    "SHIPPING_METHOD_NOT_FOUND": {"class": UnknownShippingMethodError, "severity": "P2"},
}
