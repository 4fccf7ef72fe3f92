"""
Shipping Method Registry and Factory

- register_method decorator maps a method id to its adapter class
- ShippingMethodFactory creates method instances from saved settings
- Only returns enabled methods (ZIP_SHIPPING_ENABLED_METHODS setting)
"""
from typing import Any, Dict, List, Mapping, Optional, Type
import logging

from zip_shipping.core.config import settings
from zip_shipping.core.exceptions import UnknownShippingMethodError
from zip_shipping.modules.shipping.methods.base import BaseShippingMethod

logger = logging.getLogger(__name__)

# Registry of method implementations
_METHOD_REGISTRY: Dict[str, Type[BaseShippingMethod]] = {}


def register_method(method_id: str):
    """
    Add a method class to the id -> class map the host reads.

    The id is what the host stores zone instances under, so it must stay
    stable once settings have been saved.

    Usage:
        @register_method(settings.ZIP_SHIPPING_METHOD_ID)
        class ZipRestrictedShipping(BaseShippingMethod):
            ...
    """
    def decorator(cls: Type[BaseShippingMethod]):
        _METHOD_REGISTRY[method_id] = cls
        logger.info(f"Registered shipping method: {method_id} -> {cls.__name__}")
        return cls
    return decorator


def add_shipping_methods(methods: Dict[str, Type[BaseShippingMethod]]) -> Dict[str, Type[BaseShippingMethod]]:
    """
    Merge registered methods into a host's method map.

    Hosts that keep their own id -> class registry call this when building it.
    """
    methods.update(_METHOD_REGISTRY)
    return methods


class ShippingMethodFactory:
    """
    Factory for creating shipping method instances.

    Checks the enabled-methods setting before returning a method.
    Returns None for disabled methods.
    """

    @classmethod
    def is_method_enabled(cls, method_id: str) -> bool:
        enabled = settings.ZIP_SHIPPING_ENABLED_METHODS
        return not enabled or method_id in enabled

    @classmethod
    def get_method_class(cls, method_id: str) -> Type[BaseShippingMethod]:
        """
        Look up a registered method class.

        Raises:
            UnknownShippingMethodError: if nothing is registered under method_id
        """
        method_cls = _METHOD_REGISTRY.get(method_id)
        if not method_cls:
            raise UnknownShippingMethodError(
                f"No implementation registered for shipping method: {method_id}",
                method_id=method_id,
            )
        return method_cls

    @classmethod
    def get_method(
        cls,
        method_id: str,
        options: Optional[Mapping[str, Any]] = None,
        instance_id: int = 0,
    ) -> Optional[BaseShippingMethod]:
        """
        Get a method instance if enabled.

        Args:
            method_id: The registered method id
            options: Saved settings for this instance
            instance_id: Zone instance id

        Returns:
            BaseShippingMethod instance or None if disabled/not found
        """
        if not cls.is_method_enabled(method_id):
            logger.debug(f"Shipping method {method_id} is disabled")
            return None

        try:
            method_cls = cls.get_method_class(method_id)
        except UnknownShippingMethodError as e:
            logger.warning(e.message)
            return None

        return method_cls(options, instance_id=instance_id)

    @classmethod
    def get_registered_methods(cls) -> List[str]:
        """Get list of all registered method ids."""
        return list(_METHOD_REGISTRY.keys())


def get_method(
    method_id: str,
    options: Optional[Mapping[str, Any]] = None,
    instance_id: int = 0,
) -> Optional[BaseShippingMethod]:
    """
    Convenience function to get a shipping method.

    Equivalent to ShippingMethodFactory.get_method().
    """
    return ShippingMethodFactory.get_method(method_id, options, instance_id)


# Import methods to trigger registration
# These imports must be at the bottom to avoid circular imports
from zip_shipping.modules.shipping.methods.zip_restricted import ZipRestrictedShipping  # noqa: E402, F401
