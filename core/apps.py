"""App configuration for the core Django app."""

from __future__ import annotations

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Serves Analysis Engine views over HTTP and the command line."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
    verbose_name = "Bound statistics"
