"""Postcode-restricted shipping rates."""
__version__ = "1.0.0"
