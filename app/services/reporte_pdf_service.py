# backEnd/app/services/reporte_pdf_service.py
import io
from datetime import datetime, date
from typing import Dict, List, Optional

from reportlab.lib.pagesizes import letter
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib import colors
from reportlab.lib.units import inch

from .. import config
from ..models.venta import Venta
from ..models.pago_credito import PagoCredito
from ..utils.moneda import formato_moneda
from ..utils.fechas import etiqueta_mes
from .ingresos_service import clasificar_cuota

ESTILO_ENCABEZADO = [
    ('BACKGROUND', (0, 0), (-1, 0), colors.darkblue),
    ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
    ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
    ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
    ('FONTSIZE', (0, 0), (-1, 0), 9),
    ('FONTSIZE', (0, 1), (-1, -1), 8),
    ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
    ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
    ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.lightgrey]),
]

ESTILO_DATOS = [
    ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
    ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
    ('VALIGN', (0, 0), (-1, -1), 'TOP'),
    ('FONTSIZE', (0, 0), (-1, -1), 10),
]


def _encabezado(titulo: str, info: List[List[str]], usuario_nombre: Optional[str]) -> list:
    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"<b>{config.NOMBRE_EMPRESA}</b>", styles['h1']),
        Spacer(1, 10),
        Paragraph(f"<b>{titulo}</b>", styles['h2']),
    ]
    info = info + [
        ["Fecha de Generación:", datetime.now().strftime('%d/%m/%Y %H:%M:%S')],
        ["Generado por:", usuario_nombre or 'Sistema'],
    ]
    info_table = Table(info, colWidths=[2 * inch, 4.5 * inch])
    info_table.setStyle(TableStyle(ESTILO_DATOS))
    elements.append(info_table)
    elements.append(Spacer(1, 20))
    return elements


def _construir(elements: list) -> io.BytesIO:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=letter, leftMargin=0.5 * inch, rightMargin=0.5 * inch,
                            topMargin=0.75 * inch, bottomMargin=0.75 * inch)
    doc.build(elements)
    buffer.seek(0)
    return buffer


def generar_pdf_plan_pagos(
    venta: Venta,
    cuotas: List[PagoCredito],
    hoy: Optional[date] = None,
    usuario_nombre: Optional[str] = None
) -> io.BytesIO:
    """Cronograma de cuotas de una venta a crédito con el estado visible de cada una."""
    hoy = hoy or date.today()
    cliente = venta.cliente
    terreno = venta.terreno
    info = [
        ["Venta:", f"#{venta.venta_id} del {venta.fecha_venta.strftime('%d/%m/%Y')}"],
        ["Cliente:", f"{cliente.nombre} {cliente.apellido} (CI {cliente.cedula})"],
        ["Terreno:", f"{terreno.ubicacion} ({terreno.tipo.value})"],
        ["Precio total:", formato_moneda(venta.precio_total)],
        ["Cuotas:", f"{venta.num_cuotas or len(cuotas)} al {venta.tasa_interes_anual or 0}% anual"],
    ]
    elements = _encabezado("PLAN DE PAGOS", info, usuario_nombre)

    table_data = [["N°", "Vencimiento", "Capital", "Interés", "Cuota", "Pagado", "Estado"]]
    total_capital = total_interes = total_cuota = 0
    for cuota in cuotas:
        total_capital += cuota.monto_capital
        total_interes += cuota.interes_aplicado or 0
        total_cuota += cuota.monto_cuota
        table_data.append([
            str(cuota.numero_cuota),
            cuota.fecha_vencimiento.strftime('%d/%m/%Y'),
            formato_moneda(cuota.monto_capital),
            formato_moneda(cuota.interes_aplicado),
            formato_moneda(cuota.monto_cuota),
            formato_moneda(cuota.monto_pagado) if cuota.monto_pagado is not None else "-",
            clasificar_cuota(cuota.estado, cuota.fecha_vencimiento, hoy).value,
        ])
    table_data.append([
        "", "TOTAL", formato_moneda(total_capital), formato_moneda(total_interes),
        formato_moneda(total_cuota), "", ""
    ])

    table = Table(table_data, repeatRows=1)
    table.setStyle(TableStyle(ESTILO_ENCABEZADO + [
        ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
        ('BACKGROUND', (0, -1), (-1, -1), colors.lightgrey),
    ]))
    elements.append(table)
    return _construir(elements)


def generar_pdf_ingresos_mensuales(
    ingresos: Dict,
    resumen: Dict,
    usuario_nombre: Optional[str] = None
) -> io.BytesIO:
    """Resumen de ingresos del mes (contado + crédito) y saldo de cuotas pendientes."""
    styles = getSampleStyleSheet()
    periodo = etiqueta_mes(ingresos["anio"], ingresos["mes"])
    elements = _encabezado("REPORTE DE INGRESOS MENSUALES", [["Período:", periodo]], usuario_nombre)

    elements.append(Paragraph("<b>INGRESOS</b>", styles['h2']))
    elements.append(Spacer(1, 10))
    ingresos_data = [
        ["Concepto", "Monto"],
        ["Ventas al contado", formato_moneda(ingresos["ingresos_contado"])],
        ["Cobros de cuotas", formato_moneda(ingresos["ingresos_credito"])],
        ["TOTAL", formato_moneda(ingresos["ingresos_totales"])],
    ]
    ingresos_table = Table(ingresos_data, colWidths=[3 * inch, 2.5 * inch])
    ingresos_table.setStyle(TableStyle(ESTILO_ENCABEZADO + [
        ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
    ]))
    elements.append(ingresos_table)
    elements.append(Spacer(1, 20))

    elements.append(Paragraph("<b>CARTERA DE CRÉDITO</b>", styles['h2']))
    elements.append(Spacer(1, 10))
    cartera_data = [
        ["Ventas del mes:", str(ingresos["ventas_mes"])],
        ["Cuotas pendientes:", str(resumen["cantidad_pendientes"])],
        ["Total pendiente:", formato_moneda(resumen["total_pendiente"])],
        ["Cuotas vencidas:", str(resumen["cantidad_vencidas"])],
        ["Total vencido:", formato_moneda(resumen["total_vencido"])],
    ]
    cartera_table = Table(cartera_data, colWidths=[3 * inch, 2.5 * inch])
    cartera_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (0, -1), colors.lightgrey),
        ('GRID', (0, 0), (-1, -1), 1, colors.black),
    ] + ESTILO_DATOS))
    elements.append(cartera_table)

    elements.append(Spacer(1, 15))
    elements.append(Paragraph(
        f"<i>Montos expresados en {config.MONEDA_CODIGO}. Los cobros de cuotas se cuentan "
        "en el mes en que se registró el pago.</i>",
        styles['Normal']
    ))
    return _construir(elements)
