from .http import http_get_json as http_get_json
from .weather_cache import WeatherCache as WeatherCache, make_key as make_key
from .weather_fetch import (
    build_request_params as build_request_params,
    fetch_hourly as fetch_hourly,
    temperature_at as temperature_at,
)
