"""
Base Shipping Method Interface

Host-facing adapter for shipping methods:
- Each method declares its settings fields and their defaults
- Settings arrive as the host's string-typed key/value blob
- calculate_shipping() returns the offers the host adds to its rate list

Methods own no storage and no UI. Settings persistence, form rendering,
zone assignment and rate aggregation stay with the host.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from zip_shipping.modules.shipping.evaluator import ShippingRateOffer


@dataclass(frozen=True)
class SettingsField:
    """Declaration of one host settings field."""
    key: str
    title: str
    type: str  # checkbox, text, textarea
    default: str = ""
    label: Optional[str] = None
    description: Optional[str] = None
    placeholder: Optional[str] = None
    desc_tip: bool = False


class BaseShippingMethod(ABC):
    """
    Abstract base class for host shipping methods.

    Subclasses describe themselves and compute rates; the host instantiates
    them with saved settings for a given zone instance.
    """

    supports: List[str] = []

    def __init__(self, options: Optional[Mapping[str, Any]] = None, instance_id: int = 0):
        """
        Initialize the method.

        Args:
            options: Saved settings (string-typed key/value blob)
            instance_id: Zone instance id, 0 for the global method
        """
        self._options: Dict[str, Any] = dict(options or {})
        self.instance_id = max(int(instance_id or 0), 0)

    @property
    @abstractmethod
    def method_id(self) -> str:
        """Return the registry id of this method."""
        pass

    @property
    @abstractmethod
    def method_title(self) -> str:
        """Return the admin-facing method name."""
        pass

    @property
    def method_description(self) -> str:
        return ""

    @property
    @abstractmethod
    def form_fields(self) -> Dict[str, SettingsField]:
        """Return settings field declarations keyed by option name."""
        pass

    @abstractmethod
    def calculate_shipping(self, package: Optional[Mapping[str, Any]] = None) -> List[ShippingRateOffer]:
        """
        Compute offers for a host package.

        Args:
            package: Host package descriptor with a "destination" mapping

        Returns:
            List of offers (empty when the method does not apply)
        """
        pass

    def get_option(self, key: str, default: Any = None) -> Any:
        """
        Get a saved option, falling back to the field default.

        Args:
            key: Option name
            default: Returned when neither a saved value nor a field exists

        Returns:
            Option value
        """
        if key in self._options and self._options[key] is not None:
            return self._options[key]
        field = self.form_fields.get(key)
        if field is not None:
            return field.default
        return default

    def get_options(self) -> Dict[str, Any]:
        """All options with defaults filled in."""
        return {key: self.get_option(key) for key in self.form_fields}

    def get_rate_id(self) -> str:
        """Rate id, suffixed with the instance id for zone instances."""
        if self.instance_id:
            return f"{self.method_id}:{self.instance_id}"
        return self.method_id

    def supports_feature(self, feature: str) -> bool:
        return feature in self.supports
