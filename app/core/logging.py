"""
Configuration du logging structuré JSON.

Chaque log contient:
- timestamp: ISO8601
- level: DEBUG/INFO/WARNING/ERROR/CRITICAL
- logger: nom du logger
- message: message principal
- trace_id: ID de la requête HTTP en cours (optionnel)
- champs de contexte: customer_id, order_id, email, status_code... (optionnels)
- extra: données additionnelles
"""
import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

# Context variable pour le trace_id (propagé à travers les appels d'une requête)
_trace_id: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)

# Champs remontés au premier niveau du JSON
_CONTEXT_KEYS = (
    "customer_id",
    "order_id",
    "email",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "error_type",
)


def get_trace_id() -> Optional[str]:
    """Récupère le trace_id courant."""
    return _trace_id.get()


def set_trace_id(trace_id: Optional[str] = None) -> str:
    """Définit un trace_id. Génère un nouveau si non fourni."""
    if not trace_id:
        trace_id = str(uuid.uuid4())[:8]
    _trace_id.set(trace_id)
    return trace_id


class JSONFormatter(logging.Formatter):
    """Formatter qui produit des logs en JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        trace_id = get_trace_id()
        if trace_id:
            log_data["trace_id"] = trace_id

        for key in _CONTEXT_KEYS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if getattr(record, "extra_data", None):
            log_data["extra"] = record.extra_data

        return json.dumps(log_data, ensure_ascii=False, default=str)


class StructuredLogger:
    """
    Logger structuré : les kwargs connus deviennent des champs JSON,
    les autres sont regroupés sous "extra".
    """

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, message: str, exc_info: bool = False, **context):
        record_extra = {}
        extra_data = {}
        for key, value in context.items():
            if value is None:
                continue
            if key in _CONTEXT_KEYS:
                record_extra[key] = value
            else:
                extra_data[key] = value
        if extra_data:
            record_extra["extra_data"] = extra_data

        self._logger.log(level, message, exc_info=exc_info, extra=record_extra)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = True, **kwargs):
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)

    # Méthodes spécialisées pour la couche de cohérence

    def mutation_ok(self, action: str, **kwargs):
        """Log une écriture réussie (création, renommage, suppression...)."""
        self.info(action, **kwargs)

    def mutation_rejected(self, action: str, error: Exception, **kwargs):
        """Log une écriture refusée par une règle métier."""
        self.warning(
            f"{action} rejected: {error}",
            error_type=type(error).__name__,
            **kwargs,
        )

    def storage_failure(self, action: str, error: Exception, **kwargs):
        """Log une erreur inattendue de la base (avec traceback)."""
        self.error(
            f"{action} failed: {error}",
            error_type=type(error).__name__,
            **kwargs,
        )


def setup_logging(level: str = "INFO"):
    """
    Configure le logging pour l'application.

    Args:
        level: Niveau de log (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Supprimer les handlers existants
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Handler stdout avec JSON formatter
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    root_logger.addHandler(handler)

    # Réduire le bruit des libs externes
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("fontTools").setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """Obtient un logger structuré."""
    return StructuredLogger(name)
