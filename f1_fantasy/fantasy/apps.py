from django.apps import AppConfig


class FantasyConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'fantasy'
    verbose_name = 'F1 Fantasy Market'

    def ready(self):
        from . import signals  # noqa: F401
