from django.contrib import admin

from .models import Escuela, Estudiante, ParadaRuta, Punto, RutaInteligente, Zona


@admin.register(Escuela)
class EscuelaAdmin(admin.ModelAdmin):
    list_display = ('nombre', 'es_infantil', 'latitud', 'longitud')
    list_filter = ('es_infantil',)
    search_fields = ('nombre',)


@admin.register(Punto)
class PuntoAdmin(admin.ModelAdmin):
    list_display = ('id', 'nombre', 'estado', 'latitud', 'longitud')
    list_filter = ('estado',)


@admin.register(Zona)
class ZonaAdmin(admin.ModelAdmin):
    list_display = ('nombre',)
    filter_horizontal = ('escuelas', 'puntos')


@admin.register(Estudiante)
class EstudianteAdmin(admin.ModelAdmin):
    list_display = ('nombre', 'punto', 'deficiencia')


class ParadaRutaInline(admin.TabularInline):
    model = ParadaRuta
    extra = 0


@admin.register(RutaInteligente)
class RutaInteligenteAdmin(admin.ModelAdmin):
    list_display = ('identificador', 'tipo', 'turno', 'vehiculo', 'capacidad', 'duracion_min', 'distancia_km', 'creado_en')
    list_filter = ('tipo', 'vehiculo')
    inlines = [ParadaRutaInline]
