"""
Test fixtures for the Weather Proxy.

Contains sample upstream payloads (HK Observatory open data API):
- current_weather.json: dataType=rhrread
- local_forecast.json: dataType=flw
- nine_day_forecast.json: dataType=fnd
"""
