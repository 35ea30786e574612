"""
Upstream payload models for the HK Observatory open data API.

The proxy does not interpret these payloads; the models only give the
response envelope a typed shape. Every model accepts unknown fields so an
upstream schema addition never turns into a failed attempt.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UpstreamModel(BaseModel):
    """Base for upstream payload models (permissive, keeps upstream key names)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


# === Shared readings ===


class PlaceReading(UpstreamModel):
    """A single station reading (temperature, humidity)."""

    place: Optional[str] = None
    value: Optional[float] = None
    unit: Optional[str] = None


class ReadingSet(UpstreamModel):
    data: list[PlaceReading] = Field(default_factory=list)
    recordTime: Optional[str] = None


class RainfallReading(UpstreamModel):
    place: Optional[str] = None
    max: Optional[float] = None
    min: Optional[float] = None
    unit: Optional[str] = None
    main: Optional[str] = None


class RainfallInfo(UpstreamModel):
    data: list[RainfallReading] = Field(default_factory=list)
    startTime: Optional[str] = None
    endTime: Optional[str] = None


class UvIndexReading(UpstreamModel):
    place: Optional[str] = None
    value: Optional[float] = None
    desc: Optional[str] = None


class UvIndexInfo(UpstreamModel):
    data: list[UvIndexReading] = Field(default_factory=list)
    recordDesc: Optional[str] = None


class UnitValue(UpstreamModel):
    value: Optional[float] = None
    unit: Optional[str] = None


# === Payloads per data type ===


class CurrentWeatherResponse(UpstreamModel):
    """Current Weather Report (dataType=rhrread)."""

    temperature: Optional[ReadingSet] = None
    humidity: Optional[ReadingSet] = None
    rainfall: Optional[RainfallInfo] = None
    # Upstream sends "" when no UV reading is available
    uvindex: Optional[UvIndexInfo | str] = None
    icon: list[int] = Field(default_factory=list)
    iconUpdateTime: Optional[str] = None
    warningMessage: Optional[list[str] | str] = None
    updateTime: Optional[str] = None


class LocalForecastResponse(UpstreamModel):
    """Local Weather Forecast (dataType=flw)."""

    generalSituation: Optional[str] = None
    tcInfo: Optional[str] = None
    fireDangerWarning: Optional[str] = None
    forecastPeriod: Optional[str] = None
    forecastDesc: Optional[str] = None
    outlook: Optional[str] = None
    updateTime: Optional[str] = None


class DayForecast(UpstreamModel):
    """One day of the 9-day forecast."""

    forecastDate: Optional[str] = None
    week: Optional[str] = None
    forecastWind: Optional[str] = None
    forecastWeather: Optional[str] = None
    forecastMaxtemp: Optional[UnitValue] = None
    forecastMintemp: Optional[UnitValue] = None
    forecastMaxrh: Optional[UnitValue] = None
    forecastMinrh: Optional[UnitValue] = None
    ForecastIcon: Optional[int] = None
    PSR: Optional[str] = None


class NineDayForecastResponse(UpstreamModel):
    """9-Day Weather Forecast (dataType=fnd)."""

    generalSituation: Optional[str] = None
    weatherForecast: list[DayForecast] = Field(default_factory=list)
    updateTime: Optional[str] = None
