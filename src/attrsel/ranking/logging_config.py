"""Logging setup for attribute ranking.

Every module logs through a child of the ``attrsel.ranking`` logger.
Parameters and metrics are rendered as ``key=value`` pairs, and the
values this package passes around (count matrices, score vectors,
datasets, enums) are summarized rather than dumped:

    >>> _summarize(np.zeros((3, 3)))
    '<ndarray shape=(3, 3) dtype=float64>'

No handlers are installed; applications configure output.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

# Package logger
logger = logging.getLogger("attrsel.ranking")

# Lists and tuples up to this length are logged verbatim
MAX_INLINE_ITEMS = 10


def get_logger(name: str) -> logging.Logger:
    """Child logger ``attrsel.ranking.<name>`` for a submodule."""
    return logging.getLogger(f"{logger.name}.{name}")


def _summarize(value: Any) -> Any:
    """Render one logged value compactly."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float):
        return round(value, 6)
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if hasattr(value, "shape") and hasattr(value, "dtype"):
        return f"<{type(value).__name__} shape={tuple(value.shape)} dtype={value.dtype}>"
    if hasattr(value, "num_instances") and hasattr(value, "num_attributes"):
        return (
            f"<{type(value).__name__} {getattr(value, 'name', '?')!r} "
            f"{value.num_instances()}x{value.num_attributes()}>"
        )
    if isinstance(value, (list, tuple)) and len(value) <= MAX_INLINE_ITEMS:
        return type(value)(_summarize(v) for v in value)
    if hasattr(value, "__len__"):
        return f"<{type(value).__name__} len={len(value)}>"
    return f"<{type(value).__name__}>"


def _format_fields(fields: dict[str, Any]) -> str:
    return ", ".join(f"{k}={_summarize(v)}" for k, v in fields.items())


def log_function_entry(logger: logging.Logger, func_name: str, **params: Any) -> None:
    """DEBUG record ``Entering func(k=v, ...)`` with summarized parameters."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Entering {func_name}({_format_fields(params)})")


def log_function_exit(
    logger: logging.Logger,
    func_name: str,
    result_summary: str | None = None,
) -> None:
    """DEBUG record ``Exiting func[: summary]``."""
    suffix = f": {result_summary}" if result_summary else ""
    logger.debug(f"Exiting {func_name}{suffix}")


def log_result(logger: logging.Logger, message: str, **metrics: Any) -> None:
    """INFO record ``message: k=v, ...`` for a finished computation."""
    logger.info(f"{message}: {_format_fields(metrics)}" if metrics else message)


def log_warning(logger: logging.Logger, message: str, **context: Any) -> None:
    """WARNING record ``message (k=v, ...)``."""
    logger.warning(f"{message} ({_format_fields(context)})" if context else message)
