"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("api/results/", views.results_index, name="results_index"),
    path("api/views/individual/", views.individual_view, name="individual_view"),
    path("api/views/all-windows/", views.all_windows_view, name="all_windows_view"),
    path("api/views/comparison/", views.comparison_view, name="comparison_view"),
    path("api/views/global/", views.global_view, name="global_view"),
]
