"""
Generación de rutas inteligentes.

Flujo: demanda (puntos y escuelas) -> vehículo y tipo -> presupuesto ->
secuencia -> guardado. Cualquier error corta el proceso y no se guarda nada.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils import timezone

from . import agregador, optimizer
from .almacen import AlmacenDjango, RutaCalculada
from .excepciones import ErrorValidacion, RutaInviable

logger = logging.getLogger(__name__)

ANCLA_ESCUELA = 'escuela'
ANCLA_PRIMER_PUNTO = 'primer_punto'
ANCLAS = (ANCLA_ESCUELA, ANCLA_PRIMER_PUNTO)
CRITERIOS = (optimizer.CRITERIO_PRIMERA, optimizer.CRITERIO_CUALQUIERA)

MAX_LARGO_TURNO = 20


@dataclass(frozen=True)
class ParametrosRuta:
    ancla: str = ANCLA_ESCUELA
    criterio_infantil: str = optimizer.CRITERIO_PRIMERA

    def __post_init__(self):
        if self.ancla not in ANCLAS:
            raise ImproperlyConfigured(f'RUTAS_ANCLA inválido: {self.ancla!r}')
        if self.criterio_infantil not in CRITERIOS:
            raise ImproperlyConfigured(
                f'RUTAS_CRITERIO_INFANTIL inválido: {self.criterio_infantil!r}'
            )

    @classmethod
    def desde_settings(cls):
        return cls(
            ancla=getattr(settings, 'RUTAS_ANCLA', ANCLA_ESCUELA),
            criterio_infantil=getattr(settings, 'RUTAS_CRITERIO_INFANTIL', optimizer.CRITERIO_PRIMERA),
        )


def _es_id(valor):
    return isinstance(valor, int) and not isinstance(valor, bool) and valor > 0


def _validar_turno(turno):
    if turno is None:
        return ''
    if not isinstance(turno, str) or len(turno) > MAX_LARGO_TURNO:
        raise ErrorValidacion(f'El turno debe ser texto de hasta {MAX_LARGO_TURNO} caracteres.')
    return turno.strip()


def _validar_escuelas(escuela_ids):
    if not isinstance(escuela_ids, (list, tuple)) or not escuela_ids:
        raise ErrorValidacion('Informe al menos un ID de escuela.')
    if not all(_es_id(i) for i in escuela_ids):
        raise ErrorValidacion('Los IDs de escuela deben ser enteros positivos.')

    unicos = list(dict.fromkeys(escuela_ids))
    if len(unicos) > agregador.MAX_ESCUELAS_POR_RUTA:
        raise ErrorValidacion(f'Máximo de {agregador.MAX_ESCUELAS_POR_RUTA} escuelas por ruta.')
    return unicos


def _nuevo_identificador():
    return f'RI-{int(timezone.now().timestamp() * 1000)}'


def _anclar(demanda, ancla_escuela_id):
    """Pone la escuela ancla primera; el resto conserva su orden."""
    if ancla_escuela_id is None:
        return demanda.escuelas
    ancla = [e for e in demanda.escuelas if e.id == ancla_escuela_id]
    otras = [e for e in demanda.escuelas if e.id != ancla_escuela_id]
    return ancla + otras


def _calcular(demanda, almacen, turno, parametros, zona_id=None):
    total = demanda.total_estudiantes
    vehiculo, capacidad = optimizer.elegir_vehiculo(total)

    tipo = optimizer.clasificar_tipo(
        demanda.escuelas,
        almacen.hay_deficiencia(demanda.punto_ids),
        criterio=parametros.criterio_infantil,
    )

    presupuesto = optimizer.calcular_presupuesto(
        len(demanda.puntos),
        optimizer.hay_escuela_infantil(demanda.escuelas, optimizer.CRITERIO_CUALQUIERA),
    )

    if parametros.ancla == ANCLA_ESCUELA:
        ancla = demanda.escuelas[0].coordenadas
    else:
        ancla = demanda.puntos[0].coordenadas

    secuencia = optimizer.secuenciar(demanda.puntos, ancla, presupuesto)

    return RutaCalculada(
        identificador=_nuevo_identificador(),
        tipo=tipo,
        turno=turno,
        vehiculo=vehiculo,
        capacidad=capacidad,
        paradas=secuencia.paradas,
        duracion_min=secuencia.duracion_min,
        distancia_km=secuencia.distancia_km,
        escuelas=demanda.escuelas,
        zona_id=zona_id,
    )


def _generar(demanda, almacen, turno, parametros, zona_id=None):
    try:
        ruta = _calcular(demanda, almacen, turno, parametros, zona_id=zona_id)
    except RutaInviable as exc:
        logger.warning('Ruta rechazada (escuelas=%s, zona=%s): %s',
                       [e.id for e in demanda.escuelas], zona_id, exc)
        raise

    ruta.id = almacen.guardar(ruta)
    logger.info(
        'Ruta %s (id=%s) generada: tipo=%s vehiculo=%s paradas=%d %.2f km %.0f min',
        ruta.identificador, ruta.id, ruta.tipo, ruta.vehiculo,
        len(ruta.paradas), ruta.distancia_km, ruta.duracion_min,
    )
    return ruta


def generar_por_escuelas(escuela_ids, turno='', ancla_escuela_id=None,
                         almacen=None, parametros=None):
    """
    Genera y guarda una ruta para una o dos escuelas.

    ancla_escuela_id elige de qué escuela parte el recorrido (y cuál cuenta
    como "primera" para el tipo); por defecto la primera de la lista.
    """
    escuela_ids = _validar_escuelas(escuela_ids)
    turno = _validar_turno(turno)
    if ancla_escuela_id is not None and ancla_escuela_id not in escuela_ids:
        raise ErrorValidacion('La escuela ancla debe estar entre las escuelas de la ruta.')

    almacen = almacen or AlmacenDjango()
    parametros = parametros or ParametrosRuta.desde_settings()

    with almacen.generacion(escuela_ids=escuela_ids):
        demanda = agregador.demanda_por_escuelas(almacen, escuela_ids)
        demanda.escuelas = _anclar(demanda, ancla_escuela_id)
        return _generar(demanda, almacen, turno, parametros)


def generar_por_zona(zona_id, turno='', almacen=None, parametros=None):
    """Genera y guarda una ruta con los puntos y escuelas de una zona."""
    if not _es_id(zona_id):
        raise ErrorValidacion('Informe un ID de zona válido.')
    turno = _validar_turno(turno)

    almacen = almacen or AlmacenDjango()
    parametros = parametros or ParametrosRuta.desde_settings()

    with almacen.generacion(zona_id=zona_id):
        demanda = agregador.demanda_por_zona(almacen, zona_id)
        return _generar(demanda, almacen, turno, parametros, zona_id=zona_id)
