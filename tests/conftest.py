"""
Pytest configuration and fixtures for zip shipping tests.
"""
import os
import pytest

# Set test environment before importing package modules
os.environ["ENVIRONMENT"] = "development"

from zip_shipping.modules.shipping.evaluator import MethodConfig, RateEvaluator


SAMPLE_ALLOWED_ZIPS = "110 00\n2*\n350*"


@pytest.fixture
def evaluator() -> RateEvaluator:
    """Evaluator with the default method id."""
    return RateEvaluator()


@pytest.fixture
def make_config():
    """Build a MethodConfig with sample defaults."""
    def _make(
        allowed_zips_raw: str = SAMPLE_ALLOWED_ZIPS,
        enabled: bool = True,
        title: str = "Local delivery",
        cost: str = "79.90",
    ) -> MethodConfig:
        return MethodConfig(
            enabled=enabled,
            title=title,
            cost=cost,
            allowed_zips_raw=allowed_zips_raw,
        )
    return _make


@pytest.fixture
def sample_settings() -> dict:
    """Host settings blob as saved by the admin form."""
    return {
        "enabled": "yes",
        "title": "Local delivery",
        "cost": "79.90",
        "allowed_zips": SAMPLE_ALLOWED_ZIPS,
    }


@pytest.fixture
def sample_package() -> dict:
    """Host package descriptor."""
    return {
        "destination": {
            "country": "CZ",
            "postcode": "110 00",
            "city": "Praha",
        },
        "contents_cost": 450.0,
    }
