"""
PRUEBAS DE CAJA BLANCA - Registro de pagos de cuotas
Objetivo: Testear registrar_pago y la actualización del estado de la venta
"""
import logging
import pytest
from sqlalchemy import text
from datetime import datetime
from decimal import Decimal

from app.exceptions import ErrorValidacion, ErrorNoEncontrado, ErrorConflicto
from app.models.audit_log import AuditLog
from app.models.enums import EstadoCuotaEnum, EstadoVentaEnum, RolEnum, EstadoEnum
from app.models.usuario import Usuario as DBUsuario
from app.services.pago_service import registrar_pago, estado_cuota_segun_pago, validar_monto_pago
from app.services.plan_cuotas_service import generar_plan_cuotas


@pytest.fixture
def venta_con_plan(db_session, create_test_venta):
    """Venta a crédito de 3000 en 3 cuotas sin interés (1000 cada una)."""
    venta = create_test_venta(precio_total=Decimal("3000.00"))
    cuotas = generar_plan_cuotas(db_session, venta.venta_id, 3, 0)
    return venta, cuotas


class TestValidarMontoCajaBlanca:

    @pytest.mark.parametrize("monto", [0, -5, "0.00", "abc", "Infinity"])
    def test_monto_invalido(self, monto):
        with pytest.raises(ErrorValidacion):
            validar_monto_pago(monto)

    def test_monto_se_redondea(self):
        assert validar_monto_pago("100.005") == Decimal("100.01")

    def test_estado_segun_pago(self):
        assert estado_cuota_segun_pago(Decimal("1000.00"), Decimal("1000.00")) == EstadoCuotaEnum.pagado
        assert estado_cuota_segun_pago(Decimal("1200.00"), Decimal("1000.00")) == EstadoCuotaEnum.pagado
        assert estado_cuota_segun_pago(Decimal("999.99"), Decimal("1000.00")) == EstadoCuotaEnum.pendiente


class TestRegistrarPagoCajaBlanca:
    """
    CAJA BLANCA: registrar_pago

    Rutas de ejecución identificadas:
    1. Monto no positivo → ErrorValidacion sin escribir
    2. Cuota inexistente → ErrorNoEncontrado
    3. Venta cancelada → ErrorConflicto
    4. Pago parcial → cuota pendiente
    5. Pago completo → cuota pagada
    6. Sobrepago → pagada + warning
    7. Todas pagadas → venta pagada; un pago posterior menor la vuelve activa
    8. Cuotas hermanas pagadas fuera de la sesión → se releen antes de decidir el estado
    9. usuario_id 0 → se registra como modificador
    """

    def test_rama_1_monto_cero_no_escribe(self, db_session, venta_con_plan):
        _, cuotas = venta_con_plan

        with pytest.raises(ErrorValidacion):
            registrar_pago(db_session, cuotas[0].pago_id, 0)

        db_session.refresh(cuotas[0])
        assert cuotas[0].fecha_pago is None
        assert cuotas[0].monto_pagado is None

    def test_rama_2_cuota_inexistente(self, db_session):
        with pytest.raises(ErrorNoEncontrado):
            registrar_pago(db_session, 999, 100)

    def test_rama_3_venta_cancelada(self, db_session, venta_con_plan):
        venta, cuotas = venta_con_plan
        venta.estado = EstadoVentaEnum.cancelada
        db_session.commit()

        with pytest.raises(ErrorConflicto):
            registrar_pago(db_session, cuotas[0].pago_id, 1000)

    def test_rama_4_pago_parcial_queda_pendiente(self, db_session, venta_con_plan):
        _, cuotas = venta_con_plan
        ahora = datetime(2025, 2, 10, 9, 0)

        cuota = registrar_pago(db_session, cuotas[0].pago_id, Decimal("400"), ahora=ahora)

        assert cuota.estado == EstadoCuotaEnum.pendiente
        assert cuota.monto_pagado == Decimal("400.00")
        assert cuota.fecha_pago == ahora

    def test_rama_5_pago_completo(self, db_session, venta_con_plan):
        venta, cuotas = venta_con_plan

        cuota = registrar_pago(db_session, cuotas[0].pago_id, Decimal("1000.00"), usuario_id=None)

        assert cuota.estado == EstadoCuotaEnum.pagado
        db_session.refresh(venta)
        assert venta.estado == EstadoVentaEnum.activa
        log = db_session.query(AuditLog).filter(AuditLog.accion == "PAGO").one()
        assert log.valores_antes["estado"] == "pendiente"
        assert log.valores_despues["estado"] == "pagado"

    def test_rama_6_sobrepago_se_acepta_con_warning(self, db_session, venta_con_plan, caplog):
        _, cuotas = venta_con_plan

        with caplog.at_level(logging.WARNING, logger="app.services.pago_service"):
            cuota = registrar_pago(db_session, cuotas[1].pago_id, Decimal("1500"))

        assert cuota.estado == EstadoCuotaEnum.pagado
        assert cuota.monto_pagado == Decimal("1500.00")
        assert "Sobrepago" in caplog.text

    def test_rama_7_venta_pagada_y_reversion(self, db_session, venta_con_plan):
        venta, cuotas = venta_con_plan

        # ACT: pagar todas las cuotas
        for c in cuotas:
            registrar_pago(db_session, c.pago_id, c.monto_cuota)
        db_session.refresh(venta)
        assert venta.estado == EstadoVentaEnum.pagada

        # ACT: sobrescribir el pago de la última con un monto menor
        cuota = registrar_pago(db_session, cuotas[-1].pago_id, Decimal("10"))

        # ASSERT: último pago gana y la venta vuelve a activa
        assert cuota.estado == EstadoCuotaEnum.pendiente
        assert cuota.monto_pagado == Decimal("10.00")
        db_session.refresh(venta)
        assert venta.estado == EstadoVentaEnum.activa

    def test_rama_8_cuotas_pagadas_en_otra_transaccion(self, db_session, venta_con_plan):
        # ARRANGE: primera cuota pagada y las cuotas de la venta cargadas en la sesión
        venta, cuotas = venta_con_plan
        registrar_pago(db_session, cuotas[0].pago_id, Decimal("1000.00"))
        assert sum(1 for c in venta.cuotas if c.estado == EstadoCuotaEnum.pendiente) == 2

        # ARRANGE: otra transacción paga la segunda cuota sin pasar por esta sesión
        db_session.execute(
            text("UPDATE pagos_credito SET estado = 'pagado', monto_pagado = 1000 WHERE pago_id = :id"),
            {"id": cuotas[1].pago_id}
        )

        # ACT: se paga la última
        registrar_pago(db_session, cuotas[2].pago_id, Decimal("1000.00"))

        # ASSERT: la venta ve las tres cuotas pagadas
        db_session.refresh(venta)
        assert venta.estado == EstadoVentaEnum.pagada

    def test_rama_9_usuario_con_id_cero(self, db_session, venta_con_plan):
        venta, cuotas = venta_con_plan
        db_session.add(DBUsuario(
            usuario_id=0, nombre_usuario="caja", contraseña="no-se-usa-en-tests",
            rol=RolEnum.empleado, estado=EstadoEnum.activo
        ))
        db_session.commit()

        registrar_pago(db_session, cuotas[0].pago_id, Decimal("1000.00"), usuario_id=0)

        db_session.refresh(venta)
        assert venta.modificado_por == 0
        log = db_session.query(AuditLog).filter(AuditLog.accion == "PAGO").one()
        assert log.usuario_id == 0
