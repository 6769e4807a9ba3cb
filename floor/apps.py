# floor/apps.py

from django.apps import AppConfig
import logging


class FloorConfig(AppConfig):
    """App configuration for the floor board application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "floor"
    verbose_name = "Floor Management"

    def ready(self):
        """
        Import signal modules when the app registry is fully loaded, so table
        writes start publishing change notifications.
        """
        import floor.signals  # noqa: F401  # Import solely for side effects
        logging.getLogger(__name__).debug("floor.signals connected.")
