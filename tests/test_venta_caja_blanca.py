"""
PRUEBAS DE CAJA BLANCA - Módulo Ventas
Objetivo: Testear la creación de ventas de terrenos y su cancelación

Cobertura objetivo:
- Todas las ramas de crear_venta y cancelar_venta
- Atomicidad venta + terreno + plan de cuotas
"""
import pytest
from datetime import datetime
from decimal import Decimal

from app.exceptions import ErrorValidacion, ErrorNoEncontrado, ErrorConflicto
from app.models.venta import Venta as DBVenta
from app.models.pago_credito import PagoCredito as DBPagoCredito
from app.models.enums import TipoPagoEnum, EstadoTerrenoEnum, EstadoVentaEnum
from app.schemas.venta import VentaCreate, PlanCreditoCreate
from app.services.venta_service import crear_venta, cancelar_venta, reservar_terreno
from app.services.pago_service import registrar_pago
from app.services.plan_cuotas_service import generar_plan_cuotas


class TestCrearVentaCajaBlanca:
    """
    CAJA BLANCA: crear_venta

    Rutas de ejecución identificadas:
    1. plan_credito en venta al contado → ErrorValidacion
    2. Cliente inexistente o inactivo → ErrorNoEncontrado
    3. Terreno inexistente → ErrorNoEncontrado
    4. Terreno no disponible → ErrorConflicto
    5. Venta al contado exitosa (precio del terreno por defecto)
    6. Venta a crédito con plan → cuotas en la misma transacción
    7. Error al generar el plan → no queda venta ni terreno vendido
    """

    def test_rama_1_plan_en_venta_contado(self, db_session, create_test_cliente, create_test_terreno):
        cliente = create_test_cliente()
        terreno = create_test_terreno()
        datos = VentaCreate(
            cliente_id=cliente.cliente_id, terreno_id=terreno.terreno_id,
            tipo_pago=TipoPagoEnum.contado, plan_credito=PlanCreditoCreate(num_cuotas=12)
        )

        with pytest.raises(ErrorValidacion):
            crear_venta(db_session, datos)

    def test_rama_2_cliente_inactivo(self, db_session, create_test_cliente, create_test_terreno):
        cliente = create_test_cliente(activo=False)
        terreno = create_test_terreno()
        datos = VentaCreate(cliente_id=cliente.cliente_id, terreno_id=terreno.terreno_id,
                            tipo_pago=TipoPagoEnum.contado)

        with pytest.raises(ErrorNoEncontrado) as exc_info:
            crear_venta(db_session, datos)
        assert "no encontrado o inactivo" in exc_info.value.detail

    def test_rama_3_terreno_inexistente(self, db_session, create_test_cliente):
        cliente = create_test_cliente()
        datos = VentaCreate(cliente_id=cliente.cliente_id, terreno_id=999, tipo_pago=TipoPagoEnum.contado)

        with pytest.raises(ErrorNoEncontrado):
            crear_venta(db_session, datos)

    def test_rama_4_terreno_ya_vendido(self, db_session, create_test_cliente, create_test_terreno):
        # ARRANGE: primera venta se queda con el terreno
        terreno = create_test_terreno()
        primera = VentaCreate(cliente_id=create_test_cliente(cedula="1").cliente_id,
                              terreno_id=terreno.terreno_id, tipo_pago=TipoPagoEnum.contado)
        crear_venta(db_session, primera)
        segunda = VentaCreate(cliente_id=create_test_cliente(cedula="2").cliente_id,
                              terreno_id=terreno.terreno_id, tipo_pago=TipoPagoEnum.contado)

        # ACT & ASSERT
        with pytest.raises(ErrorConflicto) as exc_info:
            crear_venta(db_session, segunda)

        assert "no está disponible" in exc_info.value.detail
        assert db_session.query(DBVenta).count() == 1

    def test_rama_5_venta_contado_exitosa(self, db_session, create_test_cliente, create_test_terreno):
        # ARRANGE
        cliente = create_test_cliente()
        terreno = create_test_terreno(precio=Decimal("8500.00"))
        datos = VentaCreate(cliente_id=cliente.cliente_id, terreno_id=terreno.terreno_id,
                            tipo_pago=TipoPagoEnum.contado)

        # ACT
        venta = crear_venta(db_session, datos)

        # ASSERT
        assert venta.precio_total == Decimal("8500.00")
        assert venta.estado == EstadoVentaEnum.activa
        assert venta.cuotas == []
        db_session.refresh(terreno)
        assert terreno.estado == EstadoTerrenoEnum.vendido

    def test_rama_6_venta_credito_con_plan(self, db_session, create_test_cliente, create_test_terreno):
        cliente = create_test_cliente()
        terreno = create_test_terreno()
        datos = VentaCreate(
            cliente_id=cliente.cliente_id, terreno_id=terreno.terreno_id,
            tipo_pago=TipoPagoEnum.credito, precio_total=Decimal("60000"),
            fecha_venta=datetime(2025, 3, 10, 11, 0),
            plan_credito=PlanCreditoCreate(num_cuotas=24, tasa_interes_anual=Decimal("10"))
        )

        venta = crear_venta(db_session, datos)

        assert venta.num_cuotas == 24
        assert len(venta.cuotas) == 24
        assert sum(c.monto_capital for c in venta.cuotas) == Decimal("60000.00")

    def test_plan_invalido_no_escribe(self, db_session, create_test_cliente, create_test_terreno):
        # ARRANGE: 61 cuotas pasa el esquema si se construye sin validar y falla en el servicio
        cliente = create_test_cliente()
        terreno = create_test_terreno()
        plan = PlanCreditoCreate.model_construct(num_cuotas=61, tasa_interes_anual=Decimal("5"))
        datos = VentaCreate(cliente_id=cliente.cliente_id, terreno_id=terreno.terreno_id,
                            tipo_pago=TipoPagoEnum.credito)
        datos.plan_credito = plan

        with pytest.raises(ErrorValidacion):
            crear_venta(db_session, datos)

        assert db_session.query(DBVenta).count() == 0
        db_session.refresh(terreno)
        assert terreno.estado == EstadoTerrenoEnum.disponible

    def test_rama_7_fallo_del_plan_revierte_venta_y_terreno(self, db_session, create_test_cliente,
                                                             create_test_terreno, monkeypatch):
        # ARRANGE: la generación de cuotas falla dentro de la transacción
        def _falla(*args, **kwargs):
            raise ErrorConflicto("plan rechazado")
        monkeypatch.setattr("app.services.venta_service.crear_cuotas_venta", _falla)
        cliente = create_test_cliente()
        terreno = create_test_terreno()
        datos = VentaCreate(
            cliente_id=cliente.cliente_id, terreno_id=terreno.terreno_id,
            tipo_pago=TipoPagoEnum.credito, plan_credito=PlanCreditoCreate(num_cuotas=12)
        )

        # ACT & ASSERT
        with pytest.raises(ErrorConflicto):
            crear_venta(db_session, datos)

        assert db_session.query(DBVenta).count() == 0
        db_session.refresh(terreno)
        assert terreno.estado == EstadoTerrenoEnum.disponible

    def test_reservar_terreno_solo_si_disponible(self, db_session, create_test_terreno):
        terreno = create_test_terreno(estado=EstadoTerrenoEnum.reservado)
        assert reservar_terreno(db_session, terreno.terreno_id) is False


class TestCancelarVentaCajaBlanca:
    """
    CAJA BLANCA: cancelar_venta

    Rutas:
    1. Venta inexistente → ErrorNoEncontrado
    2. Ya cancelada → ErrorConflicto
    3. Con pagos registrados → ErrorConflicto
    4. Sin pagos → cuotas eliminadas, terreno disponible, venta cancelada
    """

    def test_rama_1_inexistente(self, db_session):
        with pytest.raises(ErrorNoEncontrado):
            cancelar_venta(db_session, 999)

    def test_rama_2_ya_cancelada(self, db_session, create_test_venta):
        venta = create_test_venta(estado=EstadoVentaEnum.cancelada)
        with pytest.raises(ErrorConflicto):
            cancelar_venta(db_session, venta.venta_id)

    def test_rama_3_con_pagos(self, db_session, create_test_venta):
        venta = create_test_venta(precio_total=Decimal("2000.00"))
        cuotas = generar_plan_cuotas(db_session, venta.venta_id, 2, 0)
        registrar_pago(db_session, cuotas[0].pago_id, Decimal("100"))

        with pytest.raises(ErrorConflicto) as exc_info:
            cancelar_venta(db_session, venta.venta_id)

        assert "pagos registrados" in exc_info.value.detail
        db_session.refresh(venta)
        assert venta.estado == EstadoVentaEnum.activa

    def test_rama_4_cancelacion_exitosa(self, db_session, create_test_venta):
        venta = create_test_venta(precio_total=Decimal("2000.00"))
        generar_plan_cuotas(db_session, venta.venta_id, 4, 8)

        cancelada = cancelar_venta(db_session, venta.venta_id)

        assert cancelada.estado == EstadoVentaEnum.cancelada
        assert cancelada.terreno.estado == EstadoTerrenoEnum.disponible
        assert db_session.query(DBPagoCredito).filter(DBPagoCredito.venta_id == venta.venta_id).count() == 0
