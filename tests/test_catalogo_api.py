"""
Productos y depósitos vía API
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from stockdepo.shared.database.models import Movimiento


class TestProductosAPI:

    def test_create_and_list_ordered_by_name(self, client: TestClient):
        r1 = client.post("/api/v1/productos", json={"codigo": "B-1", "nombre": "Zapallo"})
        r2 = client.post("/api/v1/productos", json={"codigo": "A-1", "nombre": "Arroz", "stock": 5})
        assert r1.status_code == 201
        assert r2.status_code == 201
        assert r2.json()["unidad_medida"] == "UNIDAD"

        response = client.get("/api/v1/productos")
        assert response.status_code == 200
        assert [p["nombre"] for p in response.json()] == ["Arroz", "Zapallo"]

    def test_search_by_name(self, client: TestClient, producto):
        client.post("/api/v1/productos", json={"codigo": "X", "nombre": "Fideos"})

        response = client.get("/api/v1/productos", params={"busqueda": "yerba"})
        assert [p["codigo"] for p in response.json()] == ["P-001"]

    def test_duplicate_code_rejected(self, client: TestClient, producto):
        response = client.post("/api/v1/productos", json={"codigo": "P-001", "nombre": "Otro"})

        assert response.status_code == 409
        assert response.json()["detail"] == "Ya existe un producto con este código"

    def test_update_keeps_own_code(self, client: TestClient, producto):
        response = client.put(
            f"/api/v1/productos/{producto.id}",
            json={"codigo": "P-001", "nombre": "Yerba 500g"}
        )
        assert response.status_code == 200
        assert response.json()["nombre"] == "Yerba 500g"

    def test_update_to_taken_code_rejected(self, client: TestClient, producto):
        other = client.post("/api/v1/productos", json={"codigo": "P-002", "nombre": "Mate"}).json()

        response = client.put(f"/api/v1/productos/{other['id']}", json={"codigo": "P-001"})
        assert response.status_code == 409

    def test_get_missing_returns_404(self, client: TestClient):
        assert client.get("/api/v1/productos/999").status_code == 404

    def test_delete(self, client: TestClient, producto):
        assert client.delete(f"/api/v1/productos/{producto.id}").status_code == 204
        assert client.get(f"/api/v1/productos/{producto.id}").status_code == 404

    def test_delete_with_movements_rejected(self, client: TestClient, db_session: Session, producto, deposito):
        db_session.add(Movimiento(tipo="ENTRADA", producto_id=producto.id, deposito_destino_id=deposito.id, cantidad=1))
        db_session.commit()

        assert client.delete(f"/api/v1/productos/{producto.id}").status_code == 409

    def test_invalid_payload(self, client: TestClient):
        response = client.post("/api/v1/productos", json={"codigo": "  ", "nombre": "X"})
        assert response.status_code == 422

    def test_update_strips_text(self, client: TestClient, producto):
        response = client.put(f"/api/v1/productos/{producto.id}", json={"nombre": "  Yerba 2kg  "})

        assert response.status_code == 200
        assert response.json()["nombre"] == "Yerba 2kg"

    @pytest.mark.parametrize("payload", [
        {"codigo": "   "},
        {"nombre": "   "},
        {"codigo": None},
        {"nombre": None},
        {"unidad_medida": None},
        {"stock": None},
    ])
    def test_update_rejects_blank_or_null_required_fields(self, client: TestClient, db_session: Session, producto, payload):
        response = client.put(f"/api/v1/productos/{producto.id}", json=payload)

        assert response.status_code == 422
        db_session.refresh(producto)
        assert producto.codigo == "P-001"
        assert producto.nombre == "Yerba 1kg"


class TestDepositosAPI:

    def test_crud(self, client: TestClient):
        created = client.post("/api/v1/depositos", json={"nombre": "Sur", "descripcion": "Galpón"})
        assert created.status_code == 201
        deposito_id = created.json()["id"]

        updated = client.put(f"/api/v1/depositos/{deposito_id}", json={"descripcion": "Galpón 2"})
        assert updated.json()["descripcion"] == "Galpón 2"

        assert client.delete(f"/api/v1/depositos/{deposito_id}").status_code == 204
        assert client.get(f"/api/v1/depositos/{deposito_id}").status_code == 404

    def test_duplicate_name_rejected(self, client: TestClient, deposito):
        response = client.post("/api/v1/depositos", json={"nombre": "Central"})

        assert response.status_code == 409
        assert response.json()["detail"] == "Ya existe un depósito con este nombre"

    def test_rename_to_existing_rejected(self, client: TestClient, deposito, deposito_norte):
        response = client.put(f"/api/v1/depositos/{deposito_norte.id}", json={"nombre": "Central"})
        assert response.status_code == 409

    def test_list_ordered(self, client: TestClient, deposito, deposito_norte):
        nombres = [d["nombre"] for d in client.get("/api/v1/depositos").json()]
        assert nombres == ["Central", "Norte"]

    def test_delete_removes_positions(self, client: TestClient, deposito):
        client.post("/api/v1/posiciones/rango", json={
            "deposito_id": deposito.id,
            "columna_hasta": "B", "nivel_hasta": 1, "profundidad_hasta": 1
        })

        assert client.delete(f"/api/v1/depositos/{deposito.id}").status_code == 204
        assert client.get("/api/v1/posiciones", params={"deposito_id": deposito.id}).status_code == 404

    def test_delete_with_movements_rejected(self, client: TestClient, producto, deposito):
        client.post("/api/v1/movimientos", json={
            "tipo": "ENTRADA", "producto_id": producto.id,
            "deposito_destino_id": deposito.id, "cantidad": 2
        })

        assert client.delete(f"/api/v1/depositos/{deposito.id}").status_code == 409

    def test_update_strips_name(self, client: TestClient, deposito):
        response = client.put(f"/api/v1/depositos/{deposito.id}", json={"nombre": "  Central 2  "})

        assert response.status_code == 200
        assert response.json()["nombre"] == "Central 2"

    @pytest.mark.parametrize("nombre", [None, "   "])
    def test_update_rejects_null_or_blank_name(self, client: TestClient, db_session: Session, deposito, nombre):
        response = client.put(f"/api/v1/depositos/{deposito.id}", json={"nombre": nombre})

        assert response.status_code == 422
        db_session.refresh(deposito)
        assert deposito.nombre == "Central"

    def test_delete_with_placed_pallet_rejected(self, client: TestClient, producto, deposito):
        posicion = client.post("/api/v1/posiciones/rango", json={
            "deposito_id": deposito.id,
            "columna_hasta": "A", "nivel_hasta": 1, "profundidad_hasta": 1
        }).json()["posiciones"][0]
        pallet = client.post("/api/v1/pallets", json={
            "codigo": "PAL-1", "producto_id": producto.id, "cantidad": 5
        }).json()
        client.post(f"/api/v1/posiciones/{posicion['id']}/asignar-pallet", json={"pallet_id": pallet["id"]})

        response = client.delete(f"/api/v1/depositos/{deposito.id}")

        assert response.status_code == 409
        assert response.json()["detail"] == "El depósito tiene pallets ubicados en sus posiciones"
        assert client.get(f"/api/v1/depositos/{deposito.id}").status_code == 200
