"""Tour-listing providers."""

from src.providers.tour.bandsintown_provider import BandsintownProvider

__all__ = ["BandsintownProvider"]
