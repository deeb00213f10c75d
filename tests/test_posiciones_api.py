"""
Posiciones de rack: alta por rango, ocupación y escena
"""
import pytest
from fastapi.testclient import TestClient

from stockdepo.config.settings import settings


def _rango(client, deposito_id, **extremos):
    return client.post("/api/v1/posiciones/rango", json={"deposito_id": deposito_id, **extremos})


def _pallet(client, producto, codigo="PAL-1"):
    return client.post("/api/v1/pallets", json={
        "codigo": codigo, "producto_id": producto.id, "cantidad": 10
    }).json()


class TestCrearRango:

    def test_default_range_generates_cartesian_product(self, client: TestClient, deposito):
        response = _rango(client, deposito.id)

        assert response.status_code == 201
        # A..A x A..O x 1..3 x 1..3
        assert response.json()["cantidad"] == 1 * 15 * 3 * 3

    def test_small_range_coordinates(self, client: TestClient, deposito):
        response = _rango(
            client, deposito.id,
            rack_hasta="B", columna_hasta="B", nivel_hasta=1, profundidad_hasta=1
        )

        coordenadas = [p["coordenada"] for p in response.json()["posiciones"]]
        assert coordenadas == ["AA11", "AB11", "BA11", "BB11"]
        assert all(p["estado"] == "DISPONIBLE" for p in response.json()["posiciones"])

    def test_lowercase_letters_accepted(self, client: TestClient, deposito):
        response = _rango(
            client, deposito.id,
            rack_desde="c", rack_hasta="c", columna_hasta="a", nivel_hasta=1, profundidad_hasta=1
        )
        assert response.json()["posiciones"][0]["coordenada"] == "CA11"

    def test_collision_rejects_whole_range(self, client: TestClient, deposito):
        _rango(client, deposito.id, columna_hasta="A", nivel_hasta=1, profundidad_hasta=1)

        response = _rango(client, deposito.id, columna_hasta="B", nivel_hasta=1, profundidad_hasta=1)

        assert response.status_code == 409
        assert "AA11" in response.json()["detail"]
        listado = client.get("/api/v1/posiciones", params={"deposito_id": deposito.id}).json()
        assert len(listado) == 1

    def test_same_coordinates_in_other_warehouse(self, client: TestClient, deposito, deposito_norte):
        extremos = {"columna_hasta": "A", "nivel_hasta": 1, "profundidad_hasta": 1}
        _rango(client, deposito.id, **extremos)

        assert _rango(client, deposito_norte.id, **extremos).status_code == 201

    def test_inverted_range_rejected(self, client: TestClient, deposito):
        response = _rango(client, deposito.id, columna_desde="C", columna_hasta="A")
        assert response.status_code == 400

    @pytest.mark.parametrize("campo,valor", [
        ("rack_desde", "1"),
        ("columna_hasta", "AB"),
        ("nivel_desde", 0),
        ("profundidad_hasta", -1),
    ])
    def test_invalid_bounds(self, client: TestClient, deposito, campo, valor):
        assert _rango(client, deposito.id, **{campo: valor}).status_code == 422

    def test_range_above_maximum_rejected(self, client: TestClient, deposito, monkeypatch):
        monkeypatch.setattr(settings, "max_posiciones_por_rango", 10)

        response = _rango(client, deposito.id)
        assert response.status_code == 400

    def test_unknown_warehouse(self, client: TestClient):
        assert _rango(client, 999).status_code == 404


class TestConsultas:

    def test_list_filters(self, client: TestClient, deposito):
        _rango(client, deposito.id, rack_hasta="B", columna_hasta="B", nivel_hasta=2, profundidad_hasta=1)

        response = client.get("/api/v1/posiciones", params={"deposito_id": deposito.id, "rack": "b", "nivel": 2})
        assert [p["coordenada"] for p in response.json()] == ["BA21", "BB21"]

    def test_racks_summary(self, client: TestClient, deposito):
        _rango(client, deposito.id, columna_hasta="C", nivel_hasta=1, profundidad_hasta=1)
        _rango(client, deposito.id, rack_desde="B", rack_hasta="B", columna_hasta="A", nivel_hasta=1, profundidad_hasta=1)

        data = client.get("/api/v1/posiciones/racks", params={"deposito_id": deposito.id}).json()
        assert data["racks"] == ["A", "B"]
        assert data["columnas_por_rack"] == {"A": ["A", "B", "C"], "B": ["A"]}

    def test_scene(self, client: TestClient, deposito):
        _rango(client, deposito.id, columna_hasta="B", nivel_hasta=2, profundidad_hasta=1)

        data = client.get("/api/v1/posiciones/visualizacion", params={"deposito_id": deposito.id}).json()

        assert data["total_posiciones"] == 4
        celdas = data["racks"][0]["celdas"]
        assert {c["color"] for c in celdas} == {"#22c55e"}
        ab21 = next(c for c in celdas if c["etiqueta"] == "AB21")
        assert ab21["posicion"] == [3.5, 3, 0]

    def test_scene_level_filter(self, client: TestClient, deposito):
        _rango(client, deposito.id, columna_hasta="B", nivel_hasta=2, profundidad_hasta=1)

        data = client.get(
            "/api/v1/posiciones/visualizacion",
            params={"deposito_id": deposito.id, "nivel": 1}
        ).json()
        assert data["total_posiciones"] == 2

    def test_example_positions_are_idempotent(self, client: TestClient, deposito):
        primera = client.post("/api/v1/posiciones/ejemplo", params={"deposito_id": deposito.id})
        segunda = client.post("/api/v1/posiciones/ejemplo", params={"deposito_id": deposito.id})

        assert primera.status_code == 201
        assert sorted(p["coordenada"] for p in segunda.json()) == ["AA31", "AC22", "AE13"]
        assert all(p["estado"] == "OCUPADO" for p in segunda.json())
        listado = client.get("/api/v1/posiciones", params={"deposito_id": deposito.id}).json()
        assert len(listado) == 3


class TestOcupacion:

    @pytest.fixture
    def posicion(self, client: TestClient, deposito):
        data = _rango(client, deposito.id, columna_hasta="A", nivel_hasta=1, profundidad_hasta=1).json()
        return data["posiciones"][0]

    def test_assign_and_release(self, client: TestClient, producto, posicion):
        pallet = _pallet(client, producto)

        asignada = client.post(
            f"/api/v1/posiciones/{posicion['id']}/asignar-pallet",
            json={"pallet_id": pallet["id"]}
        )
        assert asignada.status_code == 200
        assert asignada.json()["estado"] == "OCUPADO"
        assert asignada.json()["pallet_codigo"] == "PAL-1"
        ubicado = client.get(f"/api/v1/pallets/{pallet['id']}").json()
        assert ubicado["estado"] == "UBICADO"
        assert ubicado["posicion"] == "AA11"

        liberada = client.post(f"/api/v1/posiciones/{posicion['id']}/liberar")
        assert liberada.json()["estado"] == "DISPONIBLE"
        assert liberada.json()["pallet_id"] is None
        assert client.get(f"/api/v1/pallets/{pallet['id']}").json()["estado"] == "POR_UBICAR"

    def test_assign_to_occupied_rejected(self, client: TestClient, producto, posicion):
        primero = _pallet(client, producto, "PAL-1")
        segundo = _pallet(client, producto, "PAL-2")
        url = f"/api/v1/posiciones/{posicion['id']}/asignar-pallet"
        client.post(url, json={"pallet_id": primero["id"]})

        assert client.post(url, json={"pallet_id": segundo["id"]}).status_code == 409

    def test_assign_placed_pallet_rejected(self, client: TestClient, producto, deposito, posicion):
        otra = _rango(client, deposito.id, columna_desde="B", columna_hasta="B",
                      nivel_hasta=1, profundidad_hasta=1).json()["posiciones"][0]
        pallet = _pallet(client, producto)
        client.post(f"/api/v1/posiciones/{posicion['id']}/asignar-pallet", json={"pallet_id": pallet["id"]})

        response = client.post(f"/api/v1/posiciones/{otra['id']}/asignar-pallet", json={"pallet_id": pallet["id"]})
        assert response.status_code == 409

    def test_toggle(self, client: TestClient, producto, posicion):
        url = f"/api/v1/posiciones/{posicion['id']}/alternar"
        pallet = _pallet(client, producto)

        sin_pallet = client.post(url, json={})
        assert sin_pallet.status_code == 400
        assert sin_pallet.json()["detail"] == "Ingrese el ID del pallet a asignar"

        assert client.post(url, json={"pallet_id": pallet["id"]}).json()["estado"] == "OCUPADO"
        assert client.post(url, json={}).json()["estado"] == "DISPONIBLE"

    def test_occupied_position_cannot_be_deleted(self, client: TestClient, producto, posicion):
        pallet = _pallet(client, producto)
        client.post(f"/api/v1/posiciones/{posicion['id']}/asignar-pallet", json={"pallet_id": pallet["id"]})

        assert client.delete(f"/api/v1/posiciones/{posicion['id']}").status_code == 409

    def test_update_state(self, client: TestClient, posicion):
        response = client.put(f"/api/v1/posiciones/{posicion['id']}", json={"estado": "BLOQUEADO"})

        assert response.status_code == 200
        assert response.json()["estado"] == "BLOQUEADO"

    def test_update_to_existing_coordinate_rejected(self, client: TestClient, deposito, posicion):
        _rango(client, deposito.id, columna_desde="B", columna_hasta="B", nivel_hasta=1, profundidad_hasta=1)

        response = client.put(f"/api/v1/posiciones/{posicion['id']}", json={"columna": "B"})
        assert response.status_code == 409

    def test_delete(self, client: TestClient, posicion):
        assert client.delete(f"/api/v1/posiciones/{posicion['id']}").status_code == 204
        assert client.get(f"/api/v1/posiciones/{posicion['id']}").status_code == 404
