"""
Acceso a datos para la generación de rutas.

Los componentes no tocan el ORM directamente: reciben un objeto que cumple
``AlmacenRutas``. ``AlmacenDjango`` es la implementación sobre la base de
datos; en pruebas se puede pasar cualquier doble con los mismos métodos.
"""

import functools
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import ContextManager, List, Optional, Protocol, Tuple

from django.db import DatabaseError, transaction

from .excepciones import ErrorAlmacen
from .models import Escuela, Estudiante, ParadaRuta, Punto, RutaInteligente, Zona

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PuntoDemanda:
    id: int
    latitud: float
    longitud: float
    estudiante_ids: Tuple[int, ...] = ()

    @property
    def estudiantes(self):
        return len(self.estudiante_ids)

    @property
    def coordenadas(self):
        return (self.latitud, self.longitud)


@dataclass(frozen=True)
class EscuelaRuta:
    id: int
    nombre: str
    latitud: float
    longitud: float
    es_infantil: bool = False

    @property
    def coordenadas(self):
        return (self.latitud, self.longitud)


@dataclass
class RutaCalculada:
    identificador: str
    tipo: str
    turno: str
    vehiculo: str
    capacidad: int
    paradas: List[PuntoDemanda]
    duracion_min: float
    distancia_km: float
    escuelas: List[EscuelaRuta] = field(default_factory=list)
    zona_id: Optional[int] = None
    id: Optional[int] = None

    @property
    def orden_puntos(self):
        return [p.id for p in self.paradas]

    @property
    def estudiante_ids(self):
        return sorted({i for p in self.paradas for i in p.estudiante_ids})

    @property
    def total_estudiantes(self):
        return len(self.estudiante_ids)


class AlmacenRutas(Protocol):
    def generacion(self, escuela_ids=None, zona_id=None) -> ContextManager[None]: ...

    def escuelas_por_id(self, escuela_ids) -> List[EscuelaRuta]: ...

    def escuelas_de_zona(self, zona_id) -> List[EscuelaRuta]: ...

    def puntos_de_escuelas(self, escuela_ids) -> List[PuntoDemanda]: ...

    def puntos_de_zona(self, zona_id) -> List[PuntoDemanda]: ...

    def hay_deficiencia(self, punto_ids) -> bool: ...

    def guardar(self, ruta: RutaCalculada) -> int: ...


def _traducir_errores(metodo):
    """Cualquier falla de la base sale como ErrorAlmacen."""
    @functools.wraps(metodo)
    def envoltura(self, *args, **kwargs):
        try:
            return metodo(self, *args, **kwargs)
        except DatabaseError as exc:
            logger.exception('Falla de base de datos en %s', metodo.__name__)
            raise ErrorAlmacen('Error interno al acceder a los datos de rutas.') from exc
    return envoltura


def _a_escuela(e):
    return EscuelaRuta(
        id=e.id,
        nombre=e.nombre,
        latitud=float(e.latitud),
        longitud=float(e.longitud),
        es_infantil=bool(e.es_infantil),
    )


def _a_puntos(queryset):
    puntos = list(
        queryset.filter(estado=Punto.Estado.ACTIVO).distinct().order_by('id')
    )
    # ids y no conteos: un estudiante alcanzable por varias zonas cuenta una
    # vez, y se guardan exactamente los mismos que se contaron
    por_punto = {p.id: set() for p in puntos}
    filas = Estudiante.objects.filter(punto_id__in=list(por_punto)).values_list('punto_id', 'id')
    for punto_id, estudiante_id in filas:
        por_punto[punto_id].add(estudiante_id)

    return [
        PuntoDemanda(
            id=p.id,
            latitud=float(p.latitud),
            longitud=float(p.longitud),
            estudiante_ids=tuple(sorted(por_punto[p.id])),
        )
        for p in puntos
    ]


class AlmacenDjango:

    @contextmanager
    def generacion(self, escuela_ids=None, zona_id=None):
        """
        Transacción que abarca toda la generación, desde la lectura de puntos
        hasta el guardado. Bloquea las escuelas involucradas para que dos
        pedidos sobre las mismas escuelas no se crucen.
        """
        try:
            with transaction.atomic():
                escuelas = Escuela.objects.select_for_update()
                if zona_id is not None:
                    vinculos = Zona.escuelas.through.objects.filter(zona_id=zona_id)
                    escuelas = escuelas.filter(id__in=vinculos.values('escuela_id'))
                else:
                    escuelas = escuelas.filter(id__in=list(escuela_ids or []))
                list(escuelas.order_by('id'))
                yield
        except DatabaseError as exc:
            logger.exception('Falla de base de datos durante la generación')
            raise ErrorAlmacen('Error interno al acceder a los datos de rutas.') from exc

    @_traducir_errores
    def escuelas_por_id(self, escuela_ids):
        """Escuelas en el mismo orden pedido; las que no existen se omiten."""
        por_id = {e.id: e for e in Escuela.objects.filter(id__in=escuela_ids)}
        return [_a_escuela(por_id[i]) for i in escuela_ids if i in por_id]

    @_traducir_errores
    def escuelas_de_zona(self, zona_id):
        return [_a_escuela(e) for e in Escuela.objects.filter(zonas__id=zona_id).order_by('id')]

    @_traducir_errores
    def puntos_de_escuelas(self, escuela_ids):
        return _a_puntos(Punto.objects.filter(zonas__escuelas__id__in=escuela_ids))

    @_traducir_errores
    def puntos_de_zona(self, zona_id):
        return _a_puntos(Punto.objects.filter(zonas__id=zona_id))

    @_traducir_errores
    def hay_deficiencia(self, punto_ids):
        return Estudiante.objects.filter(
            punto_id__in=punto_ids, deficiencia__isnull=False
        ).exists()

    @_traducir_errores
    def guardar(self, ruta):
        """
        Cabecera, paradas y vínculos en una sola transacción: si algo falla
        no queda una ruta a medias. Los estudiantes vinculados son los que
        se contaron al elegir el vehículo.
        """
        punto_ids = ruta.orden_puntos

        with transaction.atomic():
            registro = RutaInteligente.objects.create(
                identificador=ruta.identificador,
                tipo=ruta.tipo,
                turno=ruta.turno,
                vehiculo=ruta.vehiculo,
                capacidad=ruta.capacidad,
                orden_puntos=punto_ids,
                duracion_min=ruta.duracion_min,
                distancia_km=ruta.distancia_km,
                zona_id=ruta.zona_id,
            )
            ParadaRuta.objects.bulk_create([
                ParadaRuta(ruta=registro, punto_id=punto_id, orden=orden)
                for orden, punto_id in enumerate(punto_ids, start=1)
            ])
            registro.estudiantes.set(ruta.estudiante_ids)
            registro.escuelas.set([e.id for e in ruta.escuelas])

        return registro.id
