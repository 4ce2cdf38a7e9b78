"""Structured JSON logging carrying the order, status and role being handled."""

import logging
import sys
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

from orderflow.common.config import settings


trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="")
order_id_ctx: ContextVar[str] = ContextVar("order_id", default="")
status_ctx: ContextVar[str] = ContextVar("status", default="")
role_ctx: ContextVar[str] = ContextVar("role", default="")

LOG_FIELDS = ("service_name", "trace_id", "order_id", "status", "role")


class OrderContextFilter(logging.Filter):
    """Stamp every record with the service name and the current order context."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = settings.service_name
        record.trace_id = trace_id_ctx.get()
        record.order_id = order_id_ctx.get()
        record.status = status_ctx.get()
        record.role = role_ctx.get()
        return True


def configure_logging(level: str | None = None) -> None:
    """Send JSON lines to stdout from the root logger; safe to call more than once."""

    context_filter = OrderContextFilter()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(context_filter)
    fmt = " ".join(["%(asctime)s", "%(levelname)s", *(f"%({field})s" for field in LOG_FIELDS), "%(message)s"])
    handler.setFormatter(JsonFormatter(fmt))

    root = logging.getLogger()
    root.handlers = [handler]
    root.filters = [f for f in root.filters if not isinstance(f, OrderContextFilter)]
    root.addFilter(context_filter)
    root.setLevel(level or settings.log_level)


logger = logging.getLogger("orderflow")
