from django.apps import AppConfig


class RutasConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'rutas'
    verbose_name = 'Rutas escolares'
