"""Structlog pipeline for argument resolution logs.

``configure_logging`` runs once on import. Modules then take a logger bound
to their own name:

    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("argument_prompt_sent", argument="amount", prompt_count=1)

Output is console-rendered in development and JSON in production, and
suppressed entirely under pytest.
"""

import inspect
import logging
import sys
from types import ModuleType
from typing import TYPE_CHECKING, List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from infrastructure.logging.formatters import truncate_large_values

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

MAX_VALUE_LENGTH = 500


def _is_test_environment() -> bool:
    """True while running under pytest."""
    return "pytest" in sys.modules


def _build_processors(prod_mode: bool) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        # replies are user-controlled and unbounded
        truncate_large_values(max_length=MAX_VALUE_LENGTH),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(
    settings: Optional["Settings"] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        settings: Source of ``LOG_LEVEL`` and ``is_production``. Loaded from
            the environment when omitted.
        log_level: Overrides ``settings.LOG_LEVEL``.
        is_production: Overrides ``settings.is_production`` (JSON output).

    Returns:
        The root structlog logger.
    """
    if _is_test_environment():
        # Root level above CRITICAL: nothing is emitted.
        logging.root.setLevel(logging.CRITICAL + 1)
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            level=logging.CRITICAL + 1,
            force=True,
        )
        return structlog.stdlib.get_logger()

    if settings is None:
        # infrastructure.services imports this module transitively
        from infrastructure.configuration import Settings

        settings = Settings()

    prod_mode = settings.is_production if is_production is None else is_production
    structlog.configure(
        processors=_build_processors(prod_mode),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level_name = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )

    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def _caller_module() -> Optional[ModuleType]:
    """Module of whoever called the public helper that called this."""
    frame = inspect.currentframe()
    for _ in range(2):
        if frame is None:
            return None
        frame = frame.f_back
    if frame is None:
        return None
    return inspect.getmodule(frame)


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Logger bound to ``logger_name`` (the caller's module by default)."""
    if name:
        return logger.bind(logger_name=name)

    module = _caller_module()
    return logger.bind(logger_name=module.__name__ if module else "unknown")


def get_module_logger() -> BoundLogger:
    """Logger bound to the calling module's ``component`` and ``module_path``.

    Example:
        # in infrastructure/commands/collector.py
        logger = get_module_logger()
        # context: component="collector",
        #          module_path="infrastructure.commands.collector"
    """
    module = _caller_module()
    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
