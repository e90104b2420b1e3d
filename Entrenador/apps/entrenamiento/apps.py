from django.apps import AppConfig


class EntrenamientoConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.entrenamiento"
    verbose_name = "Rutinas y nutrición"
