"""
Errores de la generación de rutas.

Cada clase lleva el código HTTP con el que la vista la responde.
"""


class ErrorRuta(Exception):
    status_code = 500


class ErrorValidacion(ErrorRuta):
    """Entrada faltante o mal formada; se rechaza antes de calcular nada."""
    status_code = 400


class NoEncontrado(ErrorValidacion):
    status_code = 404


class RutaInviable(ErrorRuta):
    """La ruta calculada no cabe en el vehículo o en el tiempo permitido."""
    status_code = 422


class ErrorAlmacen(ErrorRuta):
    status_code = 500
