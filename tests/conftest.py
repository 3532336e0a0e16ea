import pytest

from rutas.models import Escuela, Estudiante, Punto, Zona

# Escuela en Florianópolis y puntos a menos de 2 km
ESCUELA = (-27.600, -48.550)
CERCANOS = [
    (-27.605, -48.550),
    (-27.610, -48.552),
    (-27.608, -48.560),
    (-27.603, -48.556),
]
# ~60 km al norte de la escuela
LEJANO = (-27.060, -48.550)


@pytest.fixture
def crear_red(db):
    """
    Crea una escuela con su zona, los puntos indicados y sus estudiantes.

    estudiantes: cantidad por punto; deficiencias: índices de punto donde
    el primer estudiante tiene deficiencia.
    """
    def _crear(nombre='Escola Básica Centro', coords=None, estudiantes=None,
               deficiencias=(), escuela_coords=ESCUELA):
        coords = coords if coords is not None else CERCANOS[:3]
        estudiantes = estudiantes if estudiantes is not None else [1] * len(coords)

        escuela = Escuela.objects.create(
            nombre=nombre, latitud=escuela_coords[0], longitud=escuela_coords[1]
        )
        zona = Zona.objects.create(nombre=f'Zona {nombre}')
        zona.escuelas.add(escuela)

        puntos = []
        for i, ((lat, lng), cantidad) in enumerate(zip(coords, estudiantes)):
            punto = Punto.objects.create(nombre=f'P{i + 1}', latitud=lat, longitud=lng)
            zona.puntos.add(punto)
            for j in range(cantidad):
                Estudiante.objects.create(
                    nombre=f'Estudiante {i + 1}.{j + 1}',
                    punto=punto,
                    deficiencia='TEA' if (j == 0 and i in deficiencias) else None,
                )
            puntos.append(punto)

        return escuela, zona, puntos

    return _crear
