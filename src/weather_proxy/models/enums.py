"""
Enumerations for the upstream weather API parameters.
"""

from enum import Enum


class WeatherDataType(str, Enum):
    """
    Data types supported by the HK Observatory weather.php resource.

    The value is the upstream `dataType` query parameter.
    """

    CURRENT = "rhrread"
    LOCAL_FORECAST = "flw"
    NINE_DAY_FORECAST = "fnd"

    @property
    def description(self) -> str:
        return _DATA_TYPE_DESCRIPTIONS[self]


_DATA_TYPE_DESCRIPTIONS = {
    WeatherDataType.CURRENT: "Current Weather Report",
    WeatherDataType.LOCAL_FORECAST: "Local Weather Forecast",
    WeatherDataType.NINE_DAY_FORECAST: "9-Day Weather Forecast",
}


class WeatherLang(str, Enum):
    """Response languages supported by the upstream API."""

    ENGLISH = "en"
    TRADITIONAL_CHINESE = "tc"
    SIMPLIFIED_CHINESE = "sc"

    @classmethod
    def parse(cls, code: str | None) -> "WeatherLang":
        """Map a language code to a WeatherLang; unknown codes fall back to English."""
        if not code:
            return cls.ENGLISH
        try:
            return cls(code.strip().lower())
        except ValueError:
            return cls.ENGLISH
