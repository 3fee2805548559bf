import logging
import sys
import contextvars
from typing import Optional

# Context variable to carry the module currently being exported across the call chain
_EXPORT_MODULE: contextvars.ContextVar[str] = contextvars.ContextVar("export_module", default="-")

_ROOT_NAME = "camo"


class _ExportModuleFilter(logging.Filter):
    """Logging filter that injects the export module from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.export_module = _EXPORT_MODULE.get()
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | module=%(export_module)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the camo logger.

    Output goes to stderr so that rendered declarations written to stdout
    stay clean. Only the `camo` namespace is touched; the root logger and
    other libraries are left alone.

    Safe to call multiple times; it will not duplicate handlers (idempotent).
    """
    camo_logger = logging.getLogger(_ROOT_NAME)
    camo_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for h in camo_logger.handlers:
        if any(isinstance(f, _ExportModuleFilter) for f in h.filters):
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_build_formatter())
    handler.addFilter(_ExportModuleFilter())
    camo_logger.addHandler(handler)
    camo_logger.propagate = False


def get_logger(name: str = _ROOT_NAME) -> logging.Logger:
    """Get a module-specific logger under the configured `camo` namespace."""
    camo_logger = logging.getLogger(_ROOT_NAME)
    if not camo_logger.handlers:
        configure_logging()
    return logging.getLogger(name)


def push_export_module(module: Optional[str]) -> Optional[contextvars.Token]:
    """Set the module being exported in context and return a token for later reset."""
    if not module:
        return None
    return _EXPORT_MODULE.set(module)


def reset_export_module(token: Optional[contextvars.Token]) -> None:
    """Reset the export module context using the provided token (if any)."""
    if token is None:
        return
    _EXPORT_MODULE.reset(token)


def current_export_module() -> str:
    return _EXPORT_MODULE.get()
