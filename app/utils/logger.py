# app/utils/logger.py

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import os

from app.utils.prometheus_metrics import record_log

# Caminho da pasta logs/
BASE_DIR = Path(__file__).resolve().parent.parent
LOG_DIR = Path(os.getenv("LOG_DIR", BASE_DIR / "logs"))
LOG_DIR.mkdir(parents=True, exist_ok=True)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class PrometheusLogHandler(logging.Handler):
    """Conta mensagens de log por nível na métrica log_messages_total."""

    def emit(self, record):
        record_log(record.levelname)


# Instância do logger
logger = logging.getLogger("app_logger")
logger.setLevel(LOG_LEVEL)

# Evita duplicar handlers se importar várias vezes
if not logger.handlers:
    formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] %(name)s: %(message)s")

    # Arquivo com rotação (5MB x 3)
    file_handler = RotatingFileHandler(
        filename=LOG_DIR / "app.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logger.addHandler(PrometheusLogHandler())
