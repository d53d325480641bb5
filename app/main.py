import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import config
from app.models.base import Base
from app.database import engine
from app.exceptions import ErrorNegocio
from app.routes import (
    auth, cliente, historial, terreno, venta, pagos, dashboard, reportes, audit_logs
)

# --- Configuración de Logging ---
logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)

# --- Creación de la Aplicación FastAPI ---
app = FastAPI(
    title="Monte Sagrado - Sistema de Venta de Terrenos",
    description="API para la gestión de clientes, terrenos, ventas al contado y a crédito, cuotas e ingresos.",
    version="1.0.0"
)

# --- Middlewares ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Errores de negocio -> JSON {detail, codigo, reintentable} ---
@app.exception_handler(ErrorNegocio)
async def error_negocio_handler(request: Request, exc: ErrorNegocio):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# --- Creación de Tablas en la Base de Datos (para desarrollo) ---
Base.metadata.create_all(bind=engine)

# --- Inclusión de Routers de la API ---
app.include_router(auth.router)
app.include_router(cliente.router)
app.include_router(historial.router)
app.include_router(terreno.router)
app.include_router(venta.router)
app.include_router(pagos.router)
app.include_router(dashboard.router)
app.include_router(reportes.router)
app.include_router(audit_logs.router)

logger.info("Aplicación Monte Sagrado iniciada")
