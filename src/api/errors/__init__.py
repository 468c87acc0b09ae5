"""Tradução de exceções para o envelope de erro HTTP."""

from api.errors.handlers import (
    REQUEST_ID_HEADER,
    client_ip,
    register_exception_handlers,
    render_error,
    unhandled_exception_handler,
    utc_timestamp,
)

__all__ = [
    "REQUEST_ID_HEADER",
    "client_ip",
    "register_exception_handlers",
    "render_error",
    "unhandled_exception_handler",
    "utc_timestamp",
]
