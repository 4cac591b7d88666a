"""Logging configuration and utilities."""
import logging
import sys
from typing import Any, Dict

import structlog
from structlog.stdlib import LoggerFactory

from ..config import settings


def configure_logging():
    """Configure structured logging."""

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.monitoring.log_level.upper()),
    )

    # Set third-party log levels
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


class RequestLogger:
    """Request logging utility."""

    @staticmethod
    def log_request(
        method: str,
        path: str,
        request_id: str = None,
        extra_data: Dict[str, Any] = None
    ):
        """Log incoming request."""
        logger = structlog.get_logger("api.request")
        logger.info(
            "Request started",
            method=method,
            path=path,
            request_id=request_id,
            **(extra_data or {})
        )

    @staticmethod
    def log_response(
        method: str,
        path: str,
        status_code: int,
        response_time_ms: float,
        request_id: str = None
    ):
        """Log response."""
        logger = structlog.get_logger("api.response")
        logger.info(
            "Request completed",
            method=method,
            path=path,
            status_code=status_code,
            response_time_ms=response_time_ms,
            request_id=request_id
        )

    @staticmethod
    def log_unhandled_error(method: str, path: str, request_id: str = None):
        """Log an exception that escaped the route handlers. Call from an except block."""
        logger = structlog.get_logger("api.error")
        logger.exception(
            "Unhandled error",
            method=method,
            path=path,
            request_id=request_id
        )


class BusinessLogger:
    """Task event logging utility."""

    @staticmethod
    def log_task_created(task_id: str, user_id: str, priority: str, status: str):
        logger = structlog.get_logger("business.task")
        logger.info(
            "Task created",
            event_type="task_created",
            task_id=task_id,
            user_id=user_id,
            priority=priority,
            status=status
        )

    @staticmethod
    def log_task_updated(task_id: str, user_id: str, fields: list[str]):
        logger = structlog.get_logger("business.task")
        logger.info(
            "Task updated",
            event_type="task_updated",
            task_id=task_id,
            user_id=user_id,
            fields=fields
        )

    @staticmethod
    def log_task_deleted(task_id: str, user_id: str):
        logger = structlog.get_logger("business.task")
        logger.info(
            "Task deleted",
            event_type="task_deleted",
            task_id=task_id,
            user_id=user_id
        )


class SecurityLogger:
    """Security event logging utility."""

    @staticmethod
    def log_registration(email: str, success: bool, failure_reason: str = None):
        """Log registration attempt."""
        logger = structlog.get_logger("security.auth")
        logger.info(
            "Registration attempt",
            event_type="registration",
            email=email,
            success=success,
            failure_reason=failure_reason
        )

    @staticmethod
    def log_login_attempt(
        email: str,
        success: bool,
        failure_reason: str = None
    ):
        """Log login attempt."""
        logger = structlog.get_logger("security.auth")
        logger.info(
            "Login attempt",
            event_type="login_attempt",
            email=email,
            success=success,
            failure_reason=failure_reason
        )

    @staticmethod
    def log_unauthorized_access(
        path: str,
        method: str,
        ip_address: str = None,
        reason: str = None
    ):
        """Log unauthorized access attempt."""
        logger = structlog.get_logger("security.access")
        logger.warning(
            "Unauthorized access attempt",
            event_type="unauthorized_access",
            path=path,
            method=method,
            ip_address=ip_address,
            reason=reason
        )
