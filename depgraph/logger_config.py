from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from .config import get_settings


DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(stream: Optional[TextIO] = None, level: Optional[str] = None) -> None:
	"""
	Configure the root logger with a single stream handler.

	Calling it again replaces the previous handler. Output goes to stderr unless
	another stream is given, so JSON printed on stdout stays parseable.
	"""
	level_name = (level or get_settings().LOG_LEVEL).upper()
	numeric_level = logging.getLevelName(level_name)
	if not isinstance(numeric_level, int):
		numeric_level = logging.INFO

	root_logger = logging.getLogger()
	root_logger.setLevel(numeric_level)
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)
		handler.close()

	handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
	handler.setLevel(numeric_level)
	handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
	root_logger.addHandler(handler)
