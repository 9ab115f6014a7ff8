"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from credit_engine.config import settings


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


def log_eligibility(
    request_id: str,
    customer_id: int,
    score: int,
    approved: bool,
    tier: str,
    corrected_rate: float,
    loan_id: Optional[int] = None,
) -> None:
    """Log structured decision outcome for analysis"""
    logging.info(
        "Eligibility decided",
        extra={
            "request_id": request_id,
            "customer_id": customer_id,
            "step": "loan_created" if loan_id is not None else "eligibility_checked",
            "approval_outcome": "approved" if approved else "declined",
            "credit_score": score,
            "tier": tier,
            "corrected_interest_rate": corrected_rate,
            "loan_id": loan_id,
        },
    )
