"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import CitySearchView, CityWeatherView

urlpatterns = [
    path("cities", CitySearchView.as_view(), name="search-cities"),
    path("city-weather", CityWeatherView.as_view(), name="city-weather"),
]
