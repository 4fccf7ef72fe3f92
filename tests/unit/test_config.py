import importlib

import pytest
from pydantic import ValidationError

import zip_shipping.core.config as config
from zip_shipping.core.exceptions import EXCEPTION_CATALOG, InvalidCostFormatError


def test_defaults():
    """Fresh settings describe the stock method."""
    fresh = config.Settings(_env_file=None)

    assert fresh.ZIP_SHIPPING_METHOD_ID == "zip_shipping"
    assert fresh.ZIP_SHIPPING_DEFAULT_TITLE == "Local delivery"
    assert fresh.ZIP_SHIPPING_DEFAULT_COST == "0"
    assert fresh.PATTERN_CACHE_SIZE == 128
    assert fresh.ZIP_SHIPPING_ENABLED_METHODS == []


@pytest.mark.parametrize(
    "env_value, expected",
    [
        ("zip_shipping,flat_rate", ["zip_shipping", "flat_rate"]),
        ('["zip_shipping"]', ["zip_shipping"]),
        ("  ", []),
    ],
)
def test_enabled_methods_from_env(monkeypatch, env_value, expected):
    """Enabled methods accept a JSON array or a comma-separated string."""
    monkeypatch.setenv("ZIP_SHIPPING_ENABLED_METHODS", env_value)

    assert config.Settings(_env_file=None).ZIP_SHIPPING_ENABLED_METHODS == expected


def test_negative_cache_size_rejected():
    with pytest.raises(ValidationError):
        config.Settings(_env_file=None, PATTERN_CACHE_SIZE=-1)


def test_default_title_override(monkeypatch):
    """Env overrides are picked up when settings are reloaded."""
    monkeypatch.setenv("ZIP_SHIPPING_DEFAULT_TITLE", "Courier")
    try:
        importlib.reload(config)
        assert config.settings.ZIP_SHIPPING_DEFAULT_TITLE == "Courier"
    finally:
        monkeypatch.delenv("ZIP_SHIPPING_DEFAULT_TITLE")
        importlib.reload(config)


def test_error_to_dict():
    error = InvalidCostFormatError("Cost 'abc' is not a number", cost="abc")

    assert error.to_dict() == {
        "error_type": "InvalidCostFormatError",
        "code": "INVALID_COST_FORMAT",
        "message": "Cost 'abc' is not a number",
        "severity": "P2",
        "details": {"cost": "abc", "field": "cost"},
    }
    assert EXCEPTION_CATALOG["INVALID_COST_FORMAT"]["class"] is InvalidCostFormatError


def test_method_id_override_for_migrated_hosts(monkeypatch):
    """Hosts with settings saved under the legacy id can keep using it."""
    monkeypatch.setenv("ZIP_SHIPPING_METHOD_ID", "cz_zip_shipping")

    assert config.Settings(_env_file=None).ZIP_SHIPPING_METHOD_ID == "cz_zip_shipping"
