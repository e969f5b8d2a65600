from django.apps import AppConfig


class FarmworkConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "farmwork"

    def ready(self):
        import farmwork.signals  # noqa
