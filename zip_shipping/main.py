"""
Zip Shipping
FastAPI application entry point
"""
import logging

from fastapi import FastAPI

from zip_shipping import __version__
from zip_shipping.api.routes import shipping
from zip_shipping.core.config import settings

logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, version=__version__, debug=settings.DEBUG)
app.include_router(shipping.router)


@app.get("/health")
def health():
    return {
        "status": "ok",
        "service": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "version": __version__,
    }
