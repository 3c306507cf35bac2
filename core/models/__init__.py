"""Pydantic data models shared across all components."""

from core.models.banner import BANNER_REGISTRY_NAME, BannerMode, RenderedBanner

__all__ = [
    "BANNER_REGISTRY_NAME",
    "BannerMode",
    "RenderedBanner",
]
