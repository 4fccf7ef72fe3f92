"""
Tests for the shipping method registry and the postcode-restricted method.
"""
import pytest

from zip_shipping.core.exceptions import (
    InvalidCostFormatError,
    ShippingConfigError,
    UnknownShippingMethodError,
)
from zip_shipping.modules.shipping.methods import (
    ShippingMethodFactory,
    add_shipping_methods,
    get_method,
)
from zip_shipping.modules.shipping.methods.zip_restricted import (
    ZipRestrictedShipping,
    validate_cost,
)


class TestShippingMethodFactory:
    """Test method registration and lookup."""

    def test_method_is_registered(self):
        assert "zip_shipping" in ShippingMethodFactory.get_registered_methods()

    def test_add_shipping_methods_merges_into_host_map(self):
        """Host method map keeps its own entries and gains ours."""
        host_methods = {"flat_rate": object}

        methods = add_shipping_methods(host_methods)

        assert methods["flat_rate"] is object
        assert methods["zip_shipping"] is ZipRestrictedShipping

    def test_get_method(self, sample_settings):
        method = get_method("zip_shipping", sample_settings, instance_id=4)

        assert isinstance(method, ZipRestrictedShipping)
        assert method.instance_id == 4

    def test_unknown_method_returns_none(self):
        assert ShippingMethodFactory.get_method("does_not_exist") is None

    def test_unknown_method_class_raises(self):
        with pytest.raises(UnknownShippingMethodError) as exc_info:
            ShippingMethodFactory.get_method_class("does_not_exist")

        assert exc_info.value.code == "SHIPPING_METHOD_NOT_FOUND"
        assert exc_info.value.details["method_id"] == "does_not_exist"

    def test_disabled_method_returns_none(self, monkeypatch):
        """Methods missing from the enabled list are not handed out."""
        from zip_shipping.modules.shipping import methods

        monkeypatch.setattr(methods.settings, "ZIP_SHIPPING_ENABLED_METHODS", ["flat_rate"])

        assert ShippingMethodFactory.get_method("zip_shipping") is None


class TestZipRestrictedShipping:
    """Test the host adapter."""

    def test_calculate_shipping_match(self, sample_settings, sample_package):
        method = ZipRestrictedShipping(sample_settings)

        offers = method.calculate_shipping(sample_package)

        assert len(offers) == 1
        assert offers[0].to_rate() == {
            "id": "zip_shipping",
            "label": "Local delivery",
            "cost": "79.90",
            "calc_tax": "per_item",
        }

    def test_calculate_shipping_no_match(self, sample_settings):
        method = ZipRestrictedShipping(sample_settings)

        assert method.calculate_shipping({"destination": {"postcode": "40000"}}) == []

    def test_calculate_shipping_disabled(self, sample_settings, sample_package):
        sample_settings["enabled"] = "no"
        method = ZipRestrictedShipping(sample_settings)

        assert method.calculate_shipping(sample_package) == []

    @pytest.mark.parametrize(
        "package",
        [None, {}, {"destination": None}, {"destination": {}}, {"destination": {"postcode": None}}],
    )
    def test_missing_postcode_is_empty(self, package):
        """Packages without a postcode are evaluated as ""."""
        allow_all = ZipRestrictedShipping({"allowed_zips": "*"})
        restricted = ZipRestrictedShipping({"allowed_zips": "11000"})

        assert len(allow_all.calculate_shipping(package)) == 1
        assert restricted.calculate_shipping(package) == []

    def test_instance_keeps_fixed_method_id(self, sample_settings, sample_package):
        """Zone instances offer under the fixed method id; the suffixed id is metadata."""
        method = ZipRestrictedShipping(sample_settings, instance_id=7)

        (offer,) = method.calculate_shipping(sample_package)

        assert method.get_rate_id() == "zip_shipping:7"
        assert offer.identifier == "zip_shipping"
        assert offer.to_rate()["id"] == "zip_shipping"

    @pytest.mark.parametrize(
        "postcode, should_match",
        [(11000, True), (12000, False), (0, False)],
    )
    def test_numeric_postcode(self, postcode, should_match):
        """Hosts sending integer postcodes get a normal evaluation."""
        method = ZipRestrictedShipping({"allowed_zips": "110 00"})

        offers = method.calculate_shipping({"destination": {"postcode": postcode}})

        assert (len(offers) == 1) is should_match

    def test_numeric_postcode_prefix(self):
        method = ZipRestrictedShipping({"allowed_zips": "1*"})

        assert len(method.calculate_shipping({"destination": {"postcode": 11000}})) == 1

    def test_defaults_from_form_fields(self):
        """Unsaved options fall back to field defaults."""
        method = ZipRestrictedShipping()

        assert method.get_options() == {
            "enabled": "yes",
            "title": "Local delivery",
            "cost": "0",
            "allowed_zips": "",
        }
        assert method.get_option("unknown", "fallback") == "fallback"
        # Empty allow-list: nothing qualifies
        assert method.calculate_shipping({"destination": {"postcode": "11000"}}) == []

    def test_form_fields(self):
        fields = ZipRestrictedShipping().form_fields

        assert list(fields) == ["enabled", "title", "cost", "allowed_zips"]
        assert fields["enabled"].type == "checkbox"
        assert fields["allowed_zips"].type == "textarea"
        assert fields["allowed_zips"].placeholder == "110 00\n2*\n350*"

    def test_supports_zone_instances(self):
        method = ZipRestrictedShipping()

        assert method.supports_feature("shipping-zones")
        assert method.supports_feature("instance-settings")
        assert not method.supports_feature("settings")


class TestValidateSettings:
    """Test save-time settings validation."""

    def test_valid_settings_are_cleaned(self):
        cleaned = ZipRestrictedShipping.validate_settings({
            "enabled": True,
            "title": "  Prague courier ",
            "cost": " 79.90 ",
            "allowed_zips": "110 00\n2*",
        })

        assert cleaned == {
            "enabled": "yes",
            "title": "Prague courier",
            "cost": "79.90",
            "allowed_zips": "110 00\n2*",
        }

    def test_blank_values_use_defaults(self):
        cleaned = ZipRestrictedShipping.validate_settings({"enabled": "no", "title": " ", "cost": ""})

        assert cleaned["enabled"] == "no"
        assert cleaned["title"] == "Local delivery"
        assert cleaned["cost"] == "0"
        assert cleaned["allowed_zips"] == ""

    @pytest.mark.parametrize(
        "cost",
        ["abc", "-1", "1,50", "NaN", "Infinity", "10 CZK", "1e2", "1_000", "+5", ".5", "5."],
    )
    def test_invalid_cost_rejected(self, cost):
        with pytest.raises(InvalidCostFormatError) as exc_info:
            ZipRestrictedShipping.validate_settings({"cost": cost})

        error = exc_info.value
        assert isinstance(error, ShippingConfigError)
        assert error.code == "INVALID_COST_FORMAT"
        assert error.details["field"] == "cost"
        assert error.details["cost"] == cost

    @pytest.mark.parametrize("cost, expected", [("0", "0"), ("12", "12"), ("12.50", "12.50"), (" 7 ", "7"), (15, "15")])
    def test_validate_cost(self, cost, expected):
        assert validate_cost(cost) == expected
