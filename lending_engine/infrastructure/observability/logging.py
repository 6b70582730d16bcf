"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from lending_engine.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_risk_score(
    request_id: str,
    score: int,
    rating: str,
    has_enough_data: bool,
    duration_ms: float,
) -> None:
    """Log structured scoring outcome for analysis"""
    logging.info(
        "Risk score computed",
        extra={
            "request_id": request_id,
            "step": "risk_score",
            "score": score,
            "rating": rating,
            "has_enough_data": has_enough_data,
            "duration_ms": duration_ms,
        },
    )


def log_transition_rejected(
    request_id: str,
    from_stage: str,
    to_stage: str,
    reason: Optional[str],
) -> None:
    """Log a refused stage change"""
    logging.warning(
        "Stage transition rejected",
        extra={
            "request_id": request_id,
            "step": "stage_transition",
            "from_stage": from_stage,
            "to_stage": to_stage,
            "reason": reason,
        },
    )
