import math
from dataclasses import dataclass, field

from .excepciones import ErrorValidacion, RutaInviable

# --- PARTE 1: Distancia de gran círculo (haversine) ---
RADIO_TIERRA_KM = 6371


def distancia_km(origen, destino):
    """
    Distancia en km entre dos pares (latitud, longitud) expresados en grados.
    """
    lat1, lng1 = origen
    lat2, lng2 = destino
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    a = min(a, 1.0)
    return RADIO_TIERRA_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


# --- PARTE 2: Elección de vehículo por capacidad ---
VEHICULO_VAN = 'van'
VEHICULO_MICROONIBUS = 'microonibus'
VEHICULO_ONIBUS = 'onibus'

# (tipo, capacidad) de menor a mayor
VEHICULOS = (
    (VEHICULO_VAN, 15),
    (VEHICULO_MICROONIBUS, 30),
    (VEHICULO_ONIBUS, 50),
)


def elegir_vehiculo(total_estudiantes):
    """
    Devuelve (tipo, capacidad) del vehículo más pequeño que lleva a todos.
    Si ni el más grande alcanza, la ruta no se puede armar.
    """
    if total_estudiantes < 0:
        raise ErrorValidacion('La cantidad de estudiantes no puede ser negativa.')

    for tipo, capacidad in VEHICULOS:
        if total_estudiantes <= capacidad:
            return tipo, capacidad

    capacidad_max = VEHICULOS[-1][1]
    raise RutaInviable(
        f'{total_estudiantes} estudiantes superan la capacidad máxima '
        f'de un vehículo ({capacidad_max}).'
    )


# --- PARTE 3: Presupuesto de duración y distancia ---
DURACION_MAX_MIN = 75
DESCUENTO_INFANTIL_MIN = 45
TIEMPO_POR_PARADA_MIN = 2
VELOCIDAD_MEDIA_KMH = 30


@dataclass(frozen=True)
class Presupuesto:
    duracion_max_min: float     # tope total, paradas incluidas
    tiempo_paradas_min: float
    tiempo_viaje_min: float     # lo que queda para moverse
    distancia_max_km: float


def calcular_presupuesto(num_paradas, infantil):
    """
    Tope de 75 min (30 si alguna escuela es infantil), menos 2 min por
    parada; lo que queda, a 30 km/h, es la distancia permitida.
    """
    duracion_max = DURACION_MAX_MIN - (DESCUENTO_INFANTIL_MIN if infantil else 0)
    tiempo_paradas = num_paradas * TIEMPO_POR_PARADA_MIN
    tiempo_viaje = max(duracion_max - tiempo_paradas, 0)
    return Presupuesto(
        duracion_max_min=duracion_max,
        tiempo_paradas_min=tiempo_paradas,
        tiempo_viaje_min=tiempo_viaje,
        distancia_max_km=tiempo_viaje * VELOCIDAD_MEDIA_KMH / 60,
    )


def minutos_de_viaje(distancia):
    return distancia / VELOCIDAD_MEDIA_KMH * 60


def redondear_minutos(minutos):
    """Minutos enteros; .5 sube (12.5 -> 13)."""
    return math.floor(minutos + 0.5)


# --- PARTE 4: Secuencia de paradas (vecino más cercano) ---
@dataclass
class Secuencia:
    paradas: list = field(default_factory=list)
    distancia_km: float = 0.0
    duracion_min: float = 0.0


def _excede(distancia, presupuesto):
    return distancia > presupuesto.distancia_max_km


def secuenciar(puntos, ancla, presupuesto):
    """
    Ordena los puntos partiendo del ancla (lat, lng) y eligiendo siempre el
    pendiente más cercano; ante empate gana el que aparece primero.

    El recorrido vuelve al ancla al final y ese tramo cuenta en los totales.
    Si en algún momento se pasa del presupuesto la ruta completa se rechaza
    con RutaInviable: nunca se devuelve una secuencia recortada.
    """
    pendientes = []
    vistos = set()
    for p in puntos:
        if p.id not in vistos:
            vistos.add(p.id)
            pendientes.append(p)

    secuencia = Secuencia()
    actual = ancla

    while pendientes:
        idx_min, dist_min = 0, float('inf')
        for i, p in enumerate(pendientes):
            d = distancia_km(actual, p.coordenadas)
            if d < dist_min:
                idx_min, dist_min = i, d

        siguiente = pendientes.pop(idx_min)
        secuencia.distancia_km += dist_min
        if _excede(secuencia.distancia_km, presupuesto):
            raise RutaInviable(
                f'La ruta excede {presupuesto.distancia_max_km:.2f} km '
                f'({presupuesto.duracion_max_min} min) al llegar al punto {siguiente.id}.'
            )
        secuencia.paradas.append(siguiente)
        actual = siguiente.coordenadas

    if secuencia.paradas:
        secuencia.distancia_km += distancia_km(actual, ancla)

    secuencia.duracion_min = (
        minutos_de_viaje(secuencia.distancia_km)
        + len(secuencia.paradas) * TIEMPO_POR_PARADA_MIN
    )

    if _excede(secuencia.distancia_km, presupuesto) or secuencia.duracion_min > presupuesto.duracion_max_min:
        raise RutaInviable(
            f'La ruta excede {presupuesto.duracion_max_min} min '
            f'({redondear_minutos(secuencia.duracion_min)} min, {secuencia.distancia_km:.2f} km).'
        )

    return secuencia


# --- PARTE 5: Tipo de ruta ---
TIPO_NORMAL = 'normal'
TIPO_INFANTIL = 'infantil'
TIPO_ESPECIAL = 'especial'

CRITERIO_PRIMERA = 'primera'
CRITERIO_CUALQUIERA = 'cualquiera'


def hay_escuela_infantil(escuelas, criterio=CRITERIO_CUALQUIERA):
    if not escuelas:
        return False
    if criterio == CRITERIO_PRIMERA:
        return escuelas[0].es_infantil
    return any(e.es_infantil for e in escuelas)


def clasificar_tipo(escuelas, hay_deficiencia, criterio=CRITERIO_PRIMERA):
    """
    especial > infantil > normal. Basta un estudiante con deficiencia para
    que la ruta sea especial, aunque la escuela sea infantil.
    """
    if hay_deficiencia:
        return TIPO_ESPECIAL
    if hay_escuela_infantil(escuelas, criterio):
        return TIPO_INFANTIL
    return TIPO_NORMAL
