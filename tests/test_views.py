import json

import pytest

from rutas import servicio
from rutas.excepciones import ErrorAlmacen
from rutas.models import ParadaRuta, RutaInteligente

from .conftest import CERCANOS, LEJANO

pytestmark = pytest.mark.django_db

URL_GENERAR = '/rutas-inteligentes/generar/'
URL_CREAR = '/rutas-inteligentes/crear/'
URL_LISTAR = '/rutas-inteligentes/'


@pytest.fixture
def cliente(client, django_user_model):
    usuario = django_user_model.objects.create_user(username='operador', password='clave-segura-123')
    client.force_login(usuario)
    return client


def _post(cliente, url, datos):
    return cliente.post(url, data=json.dumps(datos), content_type='application/json')


def test_sin_sesion_responde_401(client, crear_red):
    escuela, _, _ = crear_red()

    assert _post(client, URL_GENERAR, {'escuelas': [escuela.id]}).status_code == 401
    assert client.get(URL_LISTAR).status_code == 401
    assert RutaInteligente.objects.count() == 0


def test_escuela_normal_tres_puntos_diez_estudiantes(cliente, crear_red):
    escuela, _, puntos = crear_red(estudiantes=[4, 3, 3])

    resp = _post(cliente, URL_GENERAR, {'escuelas': [escuela.id], 'turno': 'manana'})

    assert resp.status_code == 200
    ruta = resp.json()['ruta']
    assert ruta['vehiculo'] == 'van'
    assert ruta['capacidad'] == 15
    assert ruta['tipo'] == 'normal'
    assert ruta['turno'] == 'manana'
    assert ruta['duracion_min'] <= 75
    assert sorted(p['id'] for p in ruta['paradas']) == sorted(p.id for p in puntos)
    assert [p['orden'] for p in ruta['paradas']] == [1, 2, 3]

    guardada = RutaInteligente.objects.get(id=ruta['id'])
    assert guardada.estudiantes.count() == 10
    assert guardada.capacidad >= guardada.estudiantes.count()
    assert ParadaRuta.objects.filter(ruta=guardada).count() == 3


def test_escuela_infantil_con_punto_a_60_km_se_rechaza(cliente, crear_red):
    escuela, _, _ = crear_red(
        nombre='NEI Central', coords=CERCANOS + [LEJANO], estudiantes=[2, 2, 2, 1, 1]
    )

    resp = _post(cliente, URL_GENERAR, {'escuelas': [escuela.id]})

    assert resp.status_code == 422
    assert 'error' in resp.json()
    assert RutaInteligente.objects.count() == 0
    assert ParadaRuta.objects.count() == 0


def test_deficiencia_gana_sobre_escuela_infantil(cliente, crear_red):
    escuela, _, _ = crear_red(
        nombre='NEI Central', coords=CERCANOS[:2], estudiantes=[1, 2], deficiencias=[0]
    )

    resp = _post(cliente, URL_GENERAR, {'escuelas': [escuela.id]})

    assert resp.status_code == 200
    assert resp.json()['ruta']['tipo'] == 'especial'


def test_crear_ruta_por_zona(cliente, crear_red):
    escuela, zona, _ = crear_red(nombre='NEI Sul', coords=CERCANOS[:2], estudiantes=[5, 5])

    resp = _post(cliente, URL_CREAR, {'zona_id': zona.id, 'turno': 'tarde'})

    assert resp.status_code == 200
    ruta = resp.json()['ruta']
    assert ruta['zona_id'] == zona.id
    assert ruta['tipo'] == 'infantil'
    assert ruta['escuelas'] == [escuela.id]
    assert RutaInteligente.objects.get(id=ruta['id']).zona_id == zona.id


@pytest.mark.parametrize("cuerpo, estado", [
    ('{no es json', 400),
    ('[1, 2]', 400),
    ('{}', 400),
    ('{"escuelas": [1, 2, 3]}', 400),
    ('{"escuelas": [987654]}', 404),
])
def test_solicitudes_invalidas(cliente, cuerpo, estado):
    resp = cliente.post(URL_GENERAR, data=cuerpo, content_type='application/json')

    assert resp.status_code == estado
    assert 'error' in resp.json()


def test_zona_inexistente(cliente):
    resp = _post(cliente, URL_CREAR, {'zona_id': 987654, 'turno': 'tarde'})
    assert resp.status_code == 404


def test_generar_solo_acepta_post(cliente):
    assert cliente.get(URL_GENERAR).status_code == 405


def test_falla_del_almacen_responde_500_generico(cliente, monkeypatch):
    def falla(*args, **kwargs):
        raise ErrorAlmacen('conexión perdida con 10.0.0.5')

    monkeypatch.setattr(servicio, 'generar_por_escuelas', falla)
    resp = _post(cliente, URL_GENERAR, {'escuelas': [1]})

    assert resp.status_code == 500
    assert resp.json() == {'error': 'Error interno al generar la ruta.'}


def test_error_inesperado_responde_500(cliente, monkeypatch):
    def falla(*args, **kwargs):
        raise RuntimeError('boom')

    monkeypatch.setattr(servicio, 'generar_por_zona', falla)
    resp = _post(cliente, URL_CREAR, {'zona_id': 1})

    assert resp.status_code == 500
    assert resp.json() == {'error': 'Error interno al generar la ruta.'}


def test_listar_y_borrar(cliente, crear_red):
    escuela, _, _ = crear_red()
    ids = [
        _post(cliente, URL_GENERAR, {'escuelas': [escuela.id]}).json()['ruta']['id']
        for _ in range(3)
    ]

    listado = cliente.get(URL_LISTAR).json()
    assert [r['id'] for r in listado] == sorted(ids, reverse=True)
    assert all(r['escuelas'] == [escuela.id] for r in listado)

    borrada = ids[1]
    resp = cliente.post(f'/rutas-inteligentes/{borrada}/borrar/')
    assert resp.status_code == 200

    listado = cliente.get(URL_LISTAR).json()
    assert [r['id'] for r in listado] == [ids[2], ids[0]]
    assert not ParadaRuta.objects.filter(ruta_id=borrada).exists()
    assert not RutaInteligente.estudiantes.through.objects.filter(rutainteligente_id=borrada).exists()
    assert not RutaInteligente.escuelas.through.objects.filter(rutainteligente_id=borrada).exists()


def test_borrar_con_delete(cliente, crear_red):
    escuela, _, _ = crear_red()
    ruta_id = _post(cliente, URL_GENERAR, {'escuelas': [escuela.id]}).json()['ruta']['id']

    assert cliente.delete(f'/rutas-inteligentes/{ruta_id}/borrar/').status_code == 200
    assert RutaInteligente.objects.count() == 0


def test_borrar_ruta_inexistente(cliente):
    resp = cliente.post('/rutas-inteligentes/987654/borrar/')
    assert resp.status_code == 404
    assert 'error' in resp.json()


def test_duracion_de_media_hora_redondea_hacia_arriba():
    from rutas.almacen import RutaCalculada
    from rutas.views import _ruta_a_dict

    ruta = RutaCalculada(
        identificador='RI-1', tipo='normal', turno='', vehiculo='van', capacidad=15,
        paradas=[], duracion_min=12.5, distancia_km=3.0, escuelas=[], id=1,
    )
    assert _ruta_a_dict(ruta)['duracion_min'] == 13


def test_listado_redondea_la_duracion_igual_que_la_generacion(cliente, crear_red):
    escuela, _, _ = crear_red()
    ruta = RutaInteligente.objects.create(
        identificador='RI-2', tipo='normal', vehiculo='van', capacidad=15,
        duracion_min=12.5, distancia_km=3.0, orden_puntos=[],
    )
    ruta.escuelas.add(escuela)

    datos = cliente.get(URL_LISTAR).json()
    assert datos[0]['duracion_min'] == 13
