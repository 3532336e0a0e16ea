# views.py

import json
import logging
from functools import wraps

from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from . import optimizer, servicio
from .excepciones import ErrorAlmacen, ErrorRuta, ErrorValidacion
from .models import RutaInteligente

logger = logging.getLogger(__name__)

ERROR_INTERNO = 'Error interno al generar la ruta.'


def sesion_requerida(vista):
    """Como login_required, pero responde 401 en JSON en vez de redirigir."""
    @wraps(vista)
    def envoltura(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({'error': 'Sesión no iniciada.'}, status=401)
        return vista(request, *args, **kwargs)
    return envoltura


def _leer_json(request):
    try:
        datos = json.loads(request.body or b'{}')
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ErrorValidacion('El cuerpo de la solicitud no es JSON válido.') from None
    if not isinstance(datos, dict):
        raise ErrorValidacion('El cuerpo de la solicitud debe ser un objeto JSON.')
    return datos


def _ruta_a_dict(ruta):
    return {
        'id': ruta.id,
        'identificador': ruta.identificador,
        'tipo': ruta.tipo,
        'turno': ruta.turno,
        'vehiculo': ruta.vehiculo,
        'capacidad': ruta.capacidad,
        'duracion_min': optimizer.redondear_minutos(ruta.duracion_min),
        'distancia_km': round(ruta.distancia_km, 2),
        'escuelas': [e.id for e in ruta.escuelas],
        'zona_id': ruta.zona_id,
        'paradas': [
            {'id': p.id, 'orden': orden, 'latitud': p.latitud, 'longitud': p.longitud}
            for orden, p in enumerate(ruta.paradas, start=1)
        ],
    }


def _responder_generacion(generar):
    """
    Ejecuta la generación y traduce los errores a respuestas JSON.
    """
    try:
        ruta = generar()
    except ErrorAlmacen:
        # ya quedó registrado en el almacén
        return JsonResponse({'error': ERROR_INTERNO}, status=500)
    except ErrorRuta as e:
        return JsonResponse({'error': str(e)}, status=e.status_code)
    except Exception:
        logger.exception('Error inesperado al generar ruta inteligente')
        return JsonResponse({'error': ERROR_INTERNO}, status=500)

    return JsonResponse({'success': True, 'ruta': _ruta_a_dict(ruta)})


@require_POST
@sesion_requerida
def generar_ruta(request):
    """
    Genera una ruta para una o dos escuelas.
    Cuerpo: {"escuelas": [id1, id2?], "turno": "...", "ancla_escuela_id": id?}
    """
    try:
        datos = _leer_json(request)
    except ErrorValidacion as e:
        return JsonResponse({'error': str(e)}, status=e.status_code)

    return _responder_generacion(lambda: servicio.generar_por_escuelas(
        datos.get('escuelas'),
        turno=datos.get('turno', ''),
        ancla_escuela_id=datos.get('ancla_escuela_id'),
    ))


@require_POST
@sesion_requerida
def crear_ruta_zona(request):
    """
    Genera una ruta con los puntos y escuelas de una zona.
    Cuerpo: {"zona_id": id, "turno": "..."}
    """
    try:
        datos = _leer_json(request)
    except ErrorValidacion as e:
        return JsonResponse({'error': str(e)}, status=e.status_code)

    return _responder_generacion(lambda: servicio.generar_por_zona(
        datos.get('zona_id'),
        turno=datos.get('turno', ''),
    ))


@require_GET
@sesion_requerida
def listar_rutas(request):
    """Todas las rutas guardadas, la más reciente primero."""
    rutas = RutaInteligente.objects.prefetch_related('escuelas')
    return JsonResponse([r.como_dict() for r in rutas], safe=False)


@require_http_methods(['POST', 'DELETE'])
@sesion_requerida
def borrar_ruta(request, ruta_id):
    """
    Borra una ruta; paradas y vínculos se van en cascada.
    """
    ruta = RutaInteligente.objects.filter(id=ruta_id).first()
    if ruta is None:
        return JsonResponse({'error': 'Ruta no encontrada.'}, status=404)
    ruta.delete()
    logger.info('Ruta %s (id=%s) eliminada', ruta.identificador, ruta_id)
    return JsonResponse({'success': True})
