from dataclasses import dataclass, field
from typing import List

from .almacen import EscuelaRuta, PuntoDemanda
from .excepciones import ErrorValidacion, NoEncontrado

MAX_ESCUELAS_POR_RUTA = 2


@dataclass
class Demanda:
    puntos: List[PuntoDemanda] = field(default_factory=list)
    escuelas: List[EscuelaRuta] = field(default_factory=list)

    @property
    def total_estudiantes(self):
        return len({i for p in self.puntos for i in p.estudiante_ids})

    @property
    def punto_ids(self):
        return [p.id for p in self.puntos]


def demanda_por_escuelas(almacen, escuela_ids):
    """
    Puntos activos de las zonas de las escuelas pedidas, con su cantidad de
    estudiantes. Las escuelas se devuelven en el orden recibido.
    """
    escuelas = almacen.escuelas_por_id(escuela_ids)
    encontradas = {e.id for e in escuelas}
    faltantes = [i for i in escuela_ids if i not in encontradas]
    if faltantes:
        raise NoEncontrado(f'Escuela(s) no encontrada(s): {faltantes}.')

    puntos = almacen.puntos_de_escuelas(escuela_ids)
    if not puntos:
        raise NoEncontrado('Ningún punto activo encontrado para las escuelas indicadas.')

    return Demanda(puntos=puntos, escuelas=escuelas)


def demanda_por_zona(almacen, zona_id):
    puntos = almacen.puntos_de_zona(zona_id)
    if not puntos:
        raise NoEncontrado('Ningún punto activo encontrado en la zona.')

    escuelas = almacen.escuelas_de_zona(zona_id)
    if not escuelas:
        raise NoEncontrado('Ninguna escuela vinculada a la zona.')
    if len(escuelas) > MAX_ESCUELAS_POR_RUTA:
        raise ErrorValidacion(f'Máximo de {MAX_ESCUELAS_POR_RUTA} escuelas por ruta.')

    return Demanda(puntos=puntos, escuelas=escuelas)
