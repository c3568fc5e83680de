from __future__ import annotations

from typing import Sequence

from .model import AnalysisResult, AnalysisWarning, DependencyEdge, FileRecord, Summary


def summarize_counts(files: Sequence[FileRecord], dependencies: Sequence[DependencyEdge]) -> Summary:
	return Summary(total_files=len(files), total_dependencies=len(dependencies))


def build_result(
	files: Sequence[FileRecord],
	dependencies: Sequence[DependencyEdge],
	warnings: Sequence[AnalysisWarning] = (),
	truncated: bool = False,
) -> AnalysisResult:
	return AnalysisResult(
		files=tuple(files),
		dependencies=tuple(dependencies),
		summary=summarize_counts(files, dependencies),
		warnings=tuple(warnings),
		truncated=truncated,
	)
