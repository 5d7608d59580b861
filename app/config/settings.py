import os
from dotenv import load_dotenv
from pathlib import Path

# Carrega o .env manualmente se estiver fora do Docker
if not os.getenv("RUNNING_IN_DOCKER"):
    dotenv_path = Path(__file__).resolve().parents[2] / ".env"
    load_dotenv(dotenv_path=dotenv_path)

# Banco de dados (sqlite local por padrão, postgres via postgresql://...)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./lanchonete.db")
DB_ECHO = os.getenv("DB_ECHO", "false").lower() in ("1", "true", "yes")

# CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
CORS_ALLOW_ALL = os.getenv("CORS_ALLOW_ALL", "false").lower() in ("1", "true", "yes")

# FastAPI / App
BASE_URL = os.getenv("BASE_URL", "")
ENABLE_DOCS = os.getenv("ENABLE_DOCS", "true").lower() in ("1", "true", "yes")

# Google Maps (cálculo de taxa de entrega)
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY")
GOOGLE_MAPS_TIMEOUT_SECONDS = float(os.getenv("GOOGLE_MAPS_TIMEOUT_SECONDS", 10))

# Entrega
DELIVERY_BASE_FEE = float(os.getenv("DELIVERY_BASE_FEE", 5))
DELIVERY_FEE_PER_KM = float(os.getenv("DELIVERY_FEE_PER_KM", 2))

# Notificações
NOTIFICATION_DEFAULT_TTL_HOURS = int(os.getenv("NOTIFICATION_DEFAULT_TTL_HOURS", 72))
