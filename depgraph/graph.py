from __future__ import annotations

from typing import Iterable, List

from .model import DependencyEdge, EdgeOrigin, FileRecord


LOCAL_PREFIXES = (".", "/")


def is_local_specifier(specifier: str) -> bool:
	return specifier.startswith(LOCAL_PREFIXES)


def build_dependency_edges(files: Iterable[FileRecord]) -> List[DependencyEdge]:
	"""One edge per import statement that targets a local file.

	Specifiers are copied verbatim; nothing is resolved or de-duplicated.
	"""
	edges: List[DependencyEdge] = []
	for record in files:
		for imp in record.imports:
			if not is_local_specifier(imp.specifier):
				continue
			edges.append(
				DependencyEdge(
					from_path=record.path,
					to=imp.specifier,
					origin=EdgeOrigin.IMPORT,
					kind=imp.kind,
					names=imp.names,
					is_type_only=imp.is_type_only,
				)
			)
	return edges
