"""weather-locator — resolve free-text addresses to coordinates for weather lookups."""

__version__ = "0.1.0"
