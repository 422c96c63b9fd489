"""
Logging for the proxy, via loguru.

Everything goes to stderr so stdout only carries the startup config echo.
Header values are never logged: they include the bearer secret.
"""
from __future__ import annotations

import sys
from typing import Any

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | "
    "<level>{message}</level>"
)

logger.remove()
logger.configure(extra={"component": "authproxy"})
logger.add(sys.stderr, format=LOG_FORMAT, level="INFO", colorize=True)


def get_logger(name: str = __name__) -> Any:
    """Logger tagged with the short module name, e.g. `routers.proxy`."""
    return logger.bind(component=name.removeprefix("authproxy."))
