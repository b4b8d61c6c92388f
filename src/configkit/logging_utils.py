# src/configkit/logging_utils.py
"""
Application-wide logging setup.

Purpose:
- One logging configuration for the CLI run, applied once in main().
- Console output for the developer, optional file log for auditing LLM cost
  and latency across runs.

Loggers live under the "configkit." namespace; the derivation core only logs
at DEBUG, the LLM boundary logs usage at INFO and degradations at WARNING.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
) -> None:
    """
    Configure root logging: stdout always, plus a UTF-8 file when log_file is given.
    Unknown level names fall back to INFO. Calling this again replaces the handlers.
    """
    log_level = getattr(logging, str(level).upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(log_level)

    logging.basicConfig(level=log_level, handlers=handlers, format=LOG_FORMAT, force=True)

    # The openai client logs every HTTP request at INFO.
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))
