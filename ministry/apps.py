from django.apps import AppConfig


class MinistryConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name               = "ministry"
    verbose_name       = "Ministry Records"

    def ready(self):
        # Register signal handlers
        import ministry.signals  # noqa: F401
