"""
Verbosity-gated logging for the formathub pipelines

Library code (tokenizer, parser, differ, ...) never receives the CLI state
explicitly. Instead the CLI connects its ProgramState once, and LOG()/WARN()
look it up through a context variable:

    state_connectToLogger(state)
    LOG("Parsed 12 top-level rules", level=2)   # shown with -v
    WARN("warning [empty-value] line 3, column 1: ...")

With no state connected (library use, tests) both helpers are silent.

Verbosity levels and the loguru level each maps to:
    1  INFO     progress of the CLI stages (default)
    2  DEBUG    per-stage details (-v)
    3  TRACE    parser decisions and LCS sizes (-vv)
"""

import sys
from contextvars import ContextVar
from typing import Any, Optional

from loguru import logger

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

LEVEL_NAMES = {1: "INFO", 2: "DEBUG", 3: "TRACE"}

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <7}</level> │ "
    "<cyan>{module}:{function}</cyan> ║ "
    "<level>{message}</level>"
)


def sink_configure(stream=sys.stderr) -> None:
    """Replace loguru's default handler with the formathub stderr sink"""
    logger.remove()
    logger.add(stream, format=LOG_FORMAT, level="TRACE")


sink_configure()


def state_connectToLogger(state: Any) -> None:
    """
    Make state.verbosity the gate for LOG()/WARN() in the current context

    Args:
        state: Object with an integer `verbosity` attribute (ProgramState)
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the connected state, 0 when nothing is connected"""
    state = _program_state.get()
    return getattr(state, 'verbosity', 0) if state is not None else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit message when the connected verbosity is at least level

    Args:
        message: Text to log
        level: 1 (normal), 2 (verbose) or 3 (trace)
        **kwargs: Passed through to loguru
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).log(LEVEL_NAMES.get(level, "TRACE"), message, **kwargs)


def WARN(message: str, **kwargs: Any) -> None:
    """
    Emit a warning at the default verbosity and above

    Used for findings the user should see without -v: validation issues and
    oversized diff inputs.
    """
    if verbosity_get() >= 1:
        logger.opt(depth=1).warning(message, **kwargs)
