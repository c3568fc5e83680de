from __future__ import annotations

import logging
import os
from typing import Callable, List, Optional, Tuple

from .config import AnalysisConfig
from .errors import DiscoveryError
from .model import AnalysisWarning, WarningKind


logger = logging.getLogger(__name__)


def to_relative_path(root: str, file_path: str) -> str:
	rel_path = os.path.relpath(file_path, root).replace(os.sep, "/")
	# os.walk hands back undecodable name bytes as lone surrogates; spell them as \xNN.
	return os.fsencode(rel_path).decode("utf-8", "backslashreplace")


def _check_root(root: str) -> None:
	if not os.path.exists(root):
		raise DiscoveryError(root, "no such directory")
	if not os.path.isdir(root):
		raise DiscoveryError(root, "not a directory")
	try:
		with os.scandir(root) as entries:
			next(entries, None)
	except OSError as e:
		raise DiscoveryError(root, e.strerror or str(e)) from e


def discover_files(
	root: str,
	config: Optional[AnalysisConfig] = None,
	warnings: Optional[List[AnalysisWarning]] = None,
	should_stop: Optional[Callable[[], bool]] = None,
) -> List[Tuple[str, str]]:
	"""Return (relative path, absolute path) for every source file under root.

	Entries are sorted by relative path. Unreadable subdirectories are skipped
	and reported through ``warnings``. When ``should_stop`` returns true the
	walk ends early with what was found.
	"""
	config = config or AnalysisConfig()
	root = os.path.abspath(root)
	_check_root(root)

	def on_error(err: OSError) -> None:
		path = err.filename or ""
		if os.path.abspath(path) == root:
			raise DiscoveryError(root, err.strerror or str(err)) from err
		rel_path = to_relative_path(root, path) if path else ""
		message = f"Skipping unreadable directory {rel_path}: {err.strerror or err}"
		logger.warning(message)
		if warnings is not None:
			warnings.append(
				AnalysisWarning(kind=WarningKind.SUBTREE_READ, path=rel_path, message=message)
			)

	files: List[Tuple[str, str]] = []
	for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
		if should_stop is not None and should_stop():
			logger.info("Discovery stopped early after %d files", len(files))
			break
		dirnames[:] = sorted(d for d in dirnames if d not in config.excluded_directory_names)
		for filename in sorted(filenames):
			if config.is_source_file(filename):
				path = os.path.join(dirpath, filename)
				files.append((to_relative_path(root, path), path))
	files.sort()
	return files


def scan_repository(
	root: str,
	config: Optional[AnalysisConfig] = None,
	warnings: Optional[List[AnalysisWarning]] = None,
	should_stop: Optional[Callable[[], bool]] = None,
) -> List[str]:
	"""Root-relative, forward-slash paths of every source file under root, sorted."""
	return [rel_path for rel_path, _ in discover_files(root, config, warnings, should_stop)]
