# backEnd/app/routes/reportes.py
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, Path, HTTPException, Response, status
from sqlalchemy.orm import Session, joinedload

from ..database import get_db
from .. import auth as auth_utils
from ..models.venta import Venta
from ..models.enums import TipoPagoEnum
from ..services.ingresos_service import calcular_ingresos_mensuales, resumen_cuotas
from ..services.reporte_pdf_service import generar_pdf_plan_pagos, generar_pdf_ingresos_mensuales

router = APIRouter(
    prefix="/reportes",
    tags=["Reportes"]
)


def _pdf_response(buffer, filename: str) -> Response:
    headers = {
        'Content-Disposition': f'attachment; filename="{filename}"'
    }
    return Response(content=buffer.getvalue(), media_type='application/pdf', headers=headers)


@router.get("/ventas/{venta_id}/plan-pagos/pdf", summary="Plan de pagos de una venta a crédito en PDF")
def get_plan_pagos_pdf(
    venta_id: int = Path(..., title="El ID de la venta"),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    venta = db.query(Venta).options(
        joinedload(Venta.cliente),
        joinedload(Venta.terreno),
        joinedload(Venta.cuotas)
    ).filter(Venta.venta_id == venta_id).first()
    if venta is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venta no encontrada.")
    if venta.tipo_pago != TipoPagoEnum.credito or not venta.cuotas:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="La venta no tiene plan de cuotas."
        )

    pdf_buffer = generar_pdf_plan_pagos(venta, list(venta.cuotas), date.today(), current_user.nombre_usuario)
    return _pdf_response(pdf_buffer, f"plan_pagos_venta_{venta_id}.pdf")


@router.get("/ingresos-mensuales/pdf", summary="Reporte de ingresos de un mes en PDF")
def get_ingresos_mensuales_pdf(
    anio: Optional[int] = Query(None, ge=1900, le=9999),
    mes: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    hoy = date.today()
    anio = anio or hoy.year
    mes = mes or hoy.month
    ingresos = calcular_ingresos_mensuales(db, anio, mes)
    resumen = resumen_cuotas(db, hoy)
    pdf_buffer = generar_pdf_ingresos_mensuales(ingresos, resumen, current_user.nombre_usuario)
    return _pdf_response(pdf_buffer, f"ingresos_{anio}_{mes:02d}.pdf")
