"""
Pallets y stock por depósito
"""
from fastapi.testclient import TestClient


def _movimiento(client, **data):
    response = client.post("/api/v1/movimientos", json=data)
    assert response.status_code == 201, response.text
    return response.json()


class TestPalletsAPI:

    def test_create_and_list(self, client: TestClient, producto):
        response = client.post("/api/v1/pallets", json={
            "codigo": "PAL-9", "producto_id": producto.id, "cantidad": 12, "lote": "L-7"
        })

        assert response.status_code == 201
        data = response.json()
        assert data["estado"] == "POR_UBICAR"
        assert data["producto_nombre"] == "Yerba 1kg"
        assert data["posicion"] is None

        listado = client.get("/api/v1/pallets", params={"estado": "POR_UBICAR"}).json()
        assert [p["codigo"] for p in listado] == ["PAL-9"]
        assert client.get("/api/v1/pallets", params={"estado": "UBICADO"}).json() == []

    def test_duplicate_code(self, client: TestClient, producto):
        payload = {"codigo": "PAL-9", "producto_id": producto.id, "cantidad": 1}
        client.post("/api/v1/pallets", json=payload)

        assert client.post("/api/v1/pallets", json=payload).status_code == 409

    def test_unknown_product(self, client: TestClient):
        response = client.post("/api/v1/pallets", json={"codigo": "X", "producto_id": 999, "cantidad": 1})
        assert response.status_code == 404

    def test_placed_pallet_cannot_be_deleted(self, client: TestClient, producto, deposito):
        pallet = client.post("/api/v1/pallets", json={
            "codigo": "PAL-1", "producto_id": producto.id, "cantidad": 1
        }).json()
        posicion = client.post("/api/v1/posiciones/rango", json={
            "deposito_id": deposito.id, "columna_hasta": "A", "nivel_hasta": 1, "profundidad_hasta": 1
        }).json()["posiciones"][0]
        client.post(f"/api/v1/posiciones/{posicion['id']}/asignar-pallet", json={"pallet_id": pallet["id"]})

        assert client.delete(f"/api/v1/pallets/{pallet['id']}").status_code == 409

        client.post(f"/api/v1/posiciones/{posicion['id']}/liberar")
        assert client.delete(f"/api/v1/pallets/{pallet['id']}").status_code == 204


class TestStockAPI:

    def test_stock_grouped_by_warehouse(self, client: TestClient, producto, deposito, deposito_norte):
        posicion = client.post("/api/v1/posiciones/rango", json={
            "deposito_id": deposito_norte.id, "columna_hasta": "A", "nivel_hasta": 1, "profundidad_hasta": 1
        }).json()["posiciones"][0]

        _movimiento(client, tipo="ENTRADA", producto_id=producto.id, deposito_destino_id=deposito.id, cantidad=20)
        _movimiento(client, tipo="SALIDA", producto_id=producto.id, deposito_origen_id=deposito.id, cantidad=5)
        _movimiento(
            client, tipo="TRASLADO", producto_id=producto.id,
            deposito_origen_id=deposito.id, deposito_destino_id=deposito_norte.id,
            posicion_destino_id=posicion["id"], cantidad=8
        )

        data = client.get("/api/v1/stock").json()
        assert len(data) == 1
        assert data[0]["stock"] == 15
        por_deposito = {d["deposito_nombre"]: d for d in data[0]["depositos"]}
        assert por_deposito["Central"]["cantidad"] == 7
        assert por_deposito["Norte"]["cantidad"] == 8
        assert por_deposito["Norte"]["posiciones"] == ["AA11"]

    def test_product_without_movements(self, client: TestClient, producto):
        data = client.get("/api/v1/stock").json()
        assert data[0]["depositos"] == []

    def test_search(self, client: TestClient, producto):
        client.post("/api/v1/productos", json={"codigo": "M-1", "nombre": "Mate"})

        data = client.get("/api/v1/stock", params={"busqueda": "mat"}).json()
        assert [p["codigo"] for p in data] == ["M-1"]

    def test_dashboard(self, client: TestClient, producto, deposito, deposito_norte):
        _movimiento(client, tipo="ENTRADA", producto_id=producto.id, deposito_destino_id=deposito.id, cantidad=10)
        _movimiento(client, tipo="ENTRADA", producto_id=producto.id, deposito_destino_id=deposito.id, cantidad=5)
        _movimiento(client, tipo="SALIDA", producto_id=producto.id, deposito_origen_id=deposito.id, cantidad=3)
        _movimiento(
            client, tipo="TRASLADO", producto_id=producto.id,
            deposito_origen_id=deposito.id, deposito_destino_id=deposito_norte.id, cantidad=2
        )

        data = client.get("/api/v1/stock/dashboard").json()
        assert data == {
            "total_productos": 1,
            "total_stock": 12,
            "total_entradas": 15,
            "total_salidas": 3,
        }


class TestHealth:

    def test_root_and_health(self, client: TestClient):
        assert client.get("/").status_code == 200
        assert client.get("/api/v1/health").json()["status"] == "healthy"
