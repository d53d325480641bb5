"""
Pruebas de integración de la API: flujo completo de una venta a crédito
"""
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app import auth as auth_utils
from app.auth import get_current_active_user
from app.database import get_db
from app.main import app
from app.models.usuario import Usuario as DBUsuario
from app.models.enums import RolEnum, EstadoEnum


def _monto(valor) -> Decimal:
    return Decimal(str(valor))


class TestFlujoVentaCredito:

    def test_flujo_completo(self, client):
        # --- Cliente y terreno ---
        r = client.post("/clientes/", json={"nombre": "María", "apellido": "Quispe", "cedula": "4455667"})
        assert r.status_code == 201, r.text
        cliente_id = r.json()["cliente_id"]

        r = client.post("/clientes/", json={"nombre": "Otra", "apellido": "Persona", "cedula": "4455667"})
        assert r.status_code == 409
        assert r.json()["codigo"] == "conflicto"

        r = client.post("/terrenos/", json={
            "numero_lote": "10", "seccion": "B", "manzana": "2", "precio": "120000.00", "tipo": "nicho"
        })
        assert r.status_code == 201, r.text
        terreno_id = r.json()["terreno_id"]
        assert r.json()["ubicacion"] == "B-2-10"

        # --- Venta a crédito sin plan; el precio sale del terreno ---
        r = client.post("/ventas/", json={"cliente_id": cliente_id, "terreno_id": terreno_id, "tipo_pago": "credito"})
        assert r.status_code == 201, r.text
        venta = r.json()
        assert _monto(venta["precio_total"]) == Decimal("120000")
        assert venta["cuotas"] == []
        assert client.get(f"/terrenos/{terreno_id}").json()["estado"] == "vendido"

        # --- Plan de cuotas ---
        r = client.post(f"/ventas/{venta['venta_id']}/plan-credito", json={"num_cuotas": 61, "tasa_interes_anual": 12})
        assert r.status_code == 422

        r = client.post(f"/ventas/{venta['venta_id']}/plan-credito", json={"num_cuotas": 12, "tasa_interes_anual": "12.345"})
        assert r.status_code == 422

        r = client.post(f"/ventas/{venta['venta_id']}/plan-credito", json={"num_cuotas": 12, "tasa_interes_anual": 12})
        assert r.status_code == 201, r.text
        cuotas = r.json()
        assert len(cuotas) == 12
        assert sum(_monto(c["monto_capital"]) for c in cuotas) == Decimal("120000")

        r = client.post(f"/ventas/{venta['venta_id']}/plan-credito", json={"num_cuotas": 6, "tasa_interes_anual": 0})
        assert r.status_code == 409
        assert r.json()["reintentable"] is False

        assert len(client.get(f"/ventas/{venta['venta_id']}/cuotas").json()) == 12

        # --- Pago de la primera cuota ---
        primera = cuotas[0]
        r = client.post(f"/pagos/{primera['pago_id']}/registrar", json={"monto_pagado": primera["monto_cuota"]})
        assert r.status_code == 200, r.text
        assert r.json()["estado"] == "pagado"
        assert r.json()["estado_visible"] == "Pagado"
        assert r.json()["cliente"]["cedula"] == "4455667"

        r = client.post(f"/pagos/{primera['pago_id']}/registrar", json={"monto_pagado": 0})
        assert r.status_code == 422

        # --- Ingresos del mes actual incluyen el pago ---
        r = client.get("/dashboard/")
        assert r.status_code == 200, r.text
        data = r.json()
        assert _monto(data["ingresos"]["ingresos_credito"]) == _monto(primera["monto_cuota"])
        assert _monto(data["ingresos"]["ingresos_contado"]) == Decimal("0")
        assert data["ingresos"]["ventas_mes"] == 1
        assert data["clientes_activos"] == 1
        assert data["terrenos_disponibles"] == 0
        assert data["cuotas"]["cantidad_pendientes"] == 11
        assert data["moneda"] == "BOB"
        assert any(k["value"].startswith("Bs. ") for k in data["kpi_cards"])

        serie = client.get("/dashboard/ingresos").json()
        assert len(serie["puntos"]) == 12

        # --- Listado de pagos ---
        r = client.get("/pagos/", params={"estado_visible": "Pagado"})
        assert r.json()["total"] == 1
        r = client.get("/pagos/", params={"search": "Quispe"})
        assert r.json()["total"] == 12
        assert client.get("/pagos/resumen").json()["cantidad_pendientes"] == 11

        # --- Reporte PDF ---
        r = client.get(f"/reportes/ventas/{venta['venta_id']}/plan-pagos/pdf")
        assert r.status_code == 200
        assert r.headers["content-type"] == "application/pdf"
        assert r.content.startswith(b"%PDF")

        # --- La venta con pagos no se puede cancelar ---
        r = client.patch(f"/ventas/{venta['venta_id']}/cancelar")
        assert r.status_code == 409

        # --- Cliente al historial ---
        r = client.request("DELETE", f"/clientes/{cliente_id}", json={"motivo": "Traslado a otra ciudad"})
        assert r.status_code == 200, r.text
        assert r.json()["motivo_eliminacion"] == "Traslado a otra ciudad"
        assert client.get("/clientes/").json()["total"] == 0
        historial = client.get("/historial/").json()
        assert historial["total"] == 1
        assert historial["items"][0]["cliente_id_original"] == cliente_id

        # --- Auditoría ---
        logs = client.get("/audit-logs/", params={"tabla": "pagos_credito"}).json()
        assert {item["accion"] for item in logs["items"]} == {"GENERAR_PLAN", "PAGO"}


class TestRutasCajaBlanca:

    def test_venta_contado_y_cancelacion_libera_terreno(self, client, create_test_cliente, create_test_terreno):
        cliente = create_test_cliente()
        terreno = create_test_terreno(precio=Decimal("5000.00"))

        r = client.post("/ventas/", json={
            "cliente_id": cliente.cliente_id, "terreno_id": terreno.terreno_id, "tipo_pago": "contado"
        })
        assert r.status_code == 201
        venta_id = r.json()["venta_id"]

        r = client.post(f"/ventas/{venta_id}/plan-credito", json={"num_cuotas": 12})
        assert r.status_code == 409

        r = client.patch(f"/ventas/{venta_id}/cancelar")
        assert r.status_code == 200
        assert r.json()["estado"] == "cancelada"
        assert client.get(f"/terrenos/{terreno.terreno_id}").json()["estado"] == "disponible"

    def test_venta_con_plan_en_una_llamada(self, client, create_test_cliente, create_test_terreno):
        cliente = create_test_cliente()
        terreno = create_test_terreno()

        r = client.post("/ventas/", json={
            "cliente_id": cliente.cliente_id, "terreno_id": terreno.terreno_id, "tipo_pago": "credito",
            "precio_total": "36000", "plan_credito": {"num_cuotas": 36, "tasa_interes_anual": "0"}
        })
        assert r.status_code == 201, r.text
        assert len(r.json()["cuotas"]) == 36
        assert all(_monto(c["monto_cuota"]) == Decimal("1000") for c in r.json()["cuotas"])

        listado = client.get("/ventas/", params={"search": cliente.cedula}).json()
        assert listado["total"] == 1

    def test_terreno_vendido_no_se_elimina(self, client, create_test_venta):
        venta = create_test_venta()
        r = client.delete(f"/terrenos/{venta.terreno_id}")
        assert r.status_code == 409

    def test_terreno_disponible_se_elimina(self, client, create_test_terreno):
        terreno = create_test_terreno()
        assert client.delete(f"/terrenos/{terreno.terreno_id}").status_code == 204
        assert client.get(f"/terrenos/{terreno.terreno_id}").status_code == 404

    def test_pago_de_cuota_inexistente(self, client):
        r = client.post("/pagos/999/registrar", json={"monto_pagado": "10"})
        assert r.status_code == 404
        assert r.json()["codigo"] == "no_encontrado"

    def test_reporte_ingresos_pdf(self, client):
        r = client.get("/reportes/ingresos-mensuales/pdf", params={"anio": 2025, "mes": 1})
        assert r.status_code == 200
        assert "ingresos_2025_01.pdf" in r.headers["content-disposition"]


class TestAutorizacion:

    @pytest.fixture
    def empleado(self, db_session):
        user = DBUsuario(nombre_usuario="cajero", contraseña="secreto", rol=RolEnum.empleado,
                         estado=EstadoEnum.activo)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    def test_empleado_no_puede_mover_al_historial(self, db_session, empleado, create_test_cliente):
        cliente = create_test_cliente()
        app.dependency_overrides[get_db] = lambda: db_session
        app.dependency_overrides[get_current_active_user] = lambda: empleado
        try:
            with TestClient(app) as c:
                r = c.delete(f"/clientes/{cliente.cliente_id}")
                assert r.status_code == 403
                assert c.get("/clientes/").status_code == 200
        finally:
            app.dependency_overrides.clear()

    def test_login_y_me(self, db_session, empleado, monkeypatch):
        # Sin bcrypt en los tests: la contraseña guardada se compara en texto plano
        monkeypatch.setattr(auth_utils, "verify_password", lambda plain, hashed: plain == hashed)
        app.dependency_overrides[get_db] = lambda: db_session
        try:
            with TestClient(app) as c:
                r = c.post("/auth/login", data={"username": "cajero", "password": "incorrecta"})
                assert r.status_code == 401

                r = c.post("/auth/login", data={"username": "cajero", "password": "secreto"})
                assert r.status_code == 200
                token = r.json()["access_token"]

                r = c.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
                assert r.status_code == 200
                assert r.json()["rol"] == "Empleado"

                assert c.get("/clientes/").status_code == 401
        finally:
            app.dependency_overrides.clear()
