"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from lab_gateway.domain.models import Summary


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service: str = "lab-gateway", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service


def setup_logging(level: str = "INFO", service: str = "lab-gateway") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service=service,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_report(
    request_id: str,
    user_id: str,
    summary: Summary,
    duration_ms: float,
) -> None:
    """Log structured analytics outcome"""
    logging.info(
        "Analytics report built",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "report_complete",
            "total_transactions": summary.total_transactions,
            "has_data": summary.has_data,
            "profit_formula": summary.profit_formula.value,
            "duration_ms": duration_ms,
        },
    )


def log_login(request_id: str, email: str, outcome: str) -> None:
    """Log login attempt outcome (never the password)"""
    logging.info(
        "Login attempt",
        extra={
            "request_id": request_id,
            "email": email,
            "step": "login",
            "login_outcome": outcome,
        },
    )
