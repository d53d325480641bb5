# backEnd/app/config.py
import os
import logging

from dotenv import load_dotenv

load_dotenv()

# --- Base de datos ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./monte_sagrado.db")

# --- Seguridad ---
SECRET_KEY = os.getenv("SECRET_KEY", "cambiar-esta-clave-en-produccion")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

# --- CORS ---
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# --- Logging ---
LOG_LEVEL = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s'

# --- Moneda (una sola por despliegue) ---
MONEDA_CODIGO = os.getenv("MONEDA_CODIGO", "BOB")
MONEDA_SIMBOLO = os.getenv("MONEDA_SIMBOLO", "Bs.")
MONEDA_SEPARADOR_MILES = os.getenv("MONEDA_SEPARADOR_MILES", ".")
MONEDA_SEPARADOR_DECIMAL = os.getenv("MONEDA_SEPARADOR_DECIMAL", ",")

# --- Datos de la empresa para reportes ---
NOMBRE_EMPRESA = os.getenv("NOMBRE_EMPRESA", "Monte Sagrado")

# --- Reglas del plan de crédito ---
MIN_CUOTAS = 1
MAX_CUOTAS = 60
TASA_INTERES_MAXIMA = 100
