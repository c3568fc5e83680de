import logging
from pathlib import Path
from textwrap import dedent
from typing import Dict

import pytest

from depgraph.config import get_settings


def write_tree(root: Path, files: Dict[str, str]) -> Path:
	for rel, text in files.items():
		p = root / rel
		p.parent.mkdir(parents=True, exist_ok=True)
		p.write_text(dedent(text), encoding="utf-8")
	return root


@pytest.fixture
def make_tree(tmp_path):
	def _make(files: Dict[str, str]) -> Path:
		return write_tree(tmp_path, files)

	return _make


@pytest.fixture(autouse=True)
def _fresh_settings():
	get_settings.cache_clear()
	yield
	get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logging():
	root_logger = logging.getLogger()
	handlers = root_logger.handlers[:]
	level = root_logger.level
	yield
	for handler in root_logger.handlers[:]:
		if handler not in handlers:
			root_logger.removeHandler(handler)
	for handler in handlers:
		if handler not in root_logger.handlers:
			root_logger.addHandler(handler)
	root_logger.setLevel(level)
