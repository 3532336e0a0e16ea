from django.urls import path
from . import views

urlpatterns = [
    path('rutas-inteligentes/', views.listar_rutas, name='listar_rutas'),
    path('rutas-inteligentes/generar/', views.generar_ruta, name='generar_ruta'),
    path('rutas-inteligentes/crear/', views.crear_ruta_zona, name='crear_ruta_zona'),
    path('rutas-inteligentes/<int:ruta_id>/borrar/', views.borrar_ruta, name='borrar_ruta'),
]
