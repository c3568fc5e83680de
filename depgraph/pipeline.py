from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional, Tuple

from .aggregate import build_result
from .config import AnalysisConfig, get_settings
from .errors import ParseError
from .extract import extract_declarations
from .fs_scan import discover_files
from .graph import build_dependency_edges
from .model import AnalysisResult, AnalysisWarning, FileRecord, WarningKind
from .ts_parse import parse_source


logger = logging.getLogger(__name__)

FileOutcome = Tuple[FileRecord, Optional[AnalysisWarning]]


def _failed(rel_path: str, kind: WarningKind, message: str) -> FileOutcome:
	logger.warning(message)
	return FileRecord(path=rel_path), AnalysisWarning(kind=kind, path=rel_path, message=message)


def analyze_file(root: str, rel_path: str, full_path: Optional[str] = None) -> FileOutcome:
	"""Parse and extract one file.

	Never raises for problems local to the file: an unreadable or malformed
	file yields an empty FileRecord together with the warning describing it.
	"""
	if full_path is None:
		full_path = os.path.join(root, *rel_path.split("/"))
	try:
		with open(full_path, "r", encoding="utf-8-sig") as fh:
			text = fh.read()
	except (OSError, UnicodeDecodeError) as e:
		return _failed(rel_path, WarningKind.FILE_READ, f"Could not read {rel_path}: {e}")

	try:
		tree = parse_source(rel_path, text)
		imports, exports = extract_declarations(tree)
		record = FileRecord(path=rel_path, imports=tuple(imports), exports=tuple(exports))
	except ParseError as e:
		return _failed(rel_path, WarningKind.PARSE, f"Could not parse {rel_path}: {e}")
	except Exception as e:
		return _failed(rel_path, WarningKind.PARSE, f"Could not analyze {rel_path}: {e}")

	return record, None


def _stop_check(
	cancel_event: Optional[threading.Event], deadline: Optional[float]
) -> Callable[[], bool]:
	def should_stop() -> bool:
		if cancel_event is not None and cancel_event.is_set():
			return True
		return deadline is not None and time.monotonic() >= deadline

	return should_stop


def analyze_repository(
	root: str,
	config: Optional[AnalysisConfig] = None,
	*,
	max_workers: Optional[int] = None,
	cancel_event: Optional[threading.Event] = None,
	deadline: Optional[float] = None,
) -> AnalysisResult:
	"""Analyze every source file under root and assemble the dependency graph.

	Raises DiscoveryError when root cannot be read. Every other failure is
	reported in ``AnalysisResult.warnings``. If ``cancel_event`` is set or
	``deadline`` (a ``time.monotonic()`` value) passes, files not yet started
	are left out and the result is marked ``truncated``.
	"""
	config = config or AnalysisConfig()
	root = os.path.abspath(root)
	workers = max(1, max_workers or get_settings().MAX_WORKERS)
	should_stop = _stop_check(cancel_event, deadline)

	warnings: List[AnalysisWarning] = []
	entries = discover_files(root, config, warnings, should_stop)
	logger.info("Found %d source files under %s", len(entries), root)
	if should_stop():
		logger.warning("Analysis of %s cancelled during discovery", root)
		return build_result([], [], warnings, truncated=True)

	def run(rel_path: str, full_path: str) -> Optional[FileOutcome]:
		if should_stop():
			return None
		return analyze_file(root, rel_path, full_path)

	slots: List[Optional[FileOutcome]] = [None] * len(entries)
	with ThreadPoolExecutor(max_workers=workers) as executor:
		futures = {
			executor.submit(run, rel_path, full_path): index
			for index, (rel_path, full_path) in enumerate(entries)
		}
		for future in as_completed(futures):
			slots[futures[future]] = future.result()

	files: List[FileRecord] = []
	for outcome in slots:
		if outcome is None:
			continue
		record, warning = outcome
		files.append(record)
		if warning is not None:
			warnings.append(warning)

	truncated = len(files) < len(entries)
	if truncated:
		logger.warning("Analysis of %s truncated after %d of %d files", root, len(files), len(entries))

	dependencies = build_dependency_edges(files)
	logger.info("Analyzed %d files, %d local dependencies", len(files), len(dependencies))
	return build_result(files, dependencies, warnings, truncated=truncated)
