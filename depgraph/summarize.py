from __future__ import annotations

from collections import Counter
from typing import List

from .model import AnalysisResult, FileRecord


def _connections(f: FileRecord) -> int:
	return len(f.imports) + len(f.exports)


def most_connected(result: AnalysisResult, limit: int) -> List[FileRecord]:
	return sorted(result.files, key=lambda f: (-_connections(f), f.path))[:limit]


def render_summary(result: AnalysisResult, top: int = 8) -> str:
	parts: List[str] = []
	parts.append(f"Files: {result.summary.total_files}")
	parts.append(f"Dependencies: {result.summary.total_dependencies}")
	if result.truncated:
		parts.append("(analysis was cut short; results are partial)")

	if result.dependencies:
		parts.append("")
		parts.append("Dependencies:")
		for dep in result.dependencies[:top]:
			parts.append(f"  {dep.from_path} → {dep.to}")

	if result.files:
		parts.append("")
		parts.append("Main files:")
		for f in most_connected(result, max(1, top - 3)):
			parts.append(f"  {f.path} ({len(f.imports)}↓ {len(f.exports)}↑)")

	if result.warnings:
		parts.append("")
		parts.append(f"Warnings ({len(result.warnings)}):")
		for w in result.warnings:
			parts.append(f"  [{w.kind}] {w.message}")
	return "\n".join(parts)


def _histogram(kinds: Counter) -> List[str]:
	return [f"- {kind}: {count}" for kind, count in sorted(kinds.items())]


def build_prompt_context(result: AnalysisResult, question: str) -> str:
	"""Prompt text a query layer can send to a language model along with the question."""
	lines: List[str] = [
		"You are analyzing a TypeScript/JavaScript codebase. Here's what I found:",
		"",
		f"**Files analyzed:** {result.summary.total_files}",
		f"**Dependencies:** {result.summary.total_dependencies}",
		"",
		"**Key dependencies:**",
	]
	for dep in result.dependencies[:15]:
		names = f" [{', '.join(dep.names)}]" if dep.names else ""
		type_info = " (type-only)" if dep.is_type_only else ""
		lines.append(f"- {dep.from_path} → {dep.to}{names}{type_info}")

	lines.append("")
	lines.append("**Files with most connections:**")
	for f in most_connected(result, 8):
		lines.append(f"- {f.path} ({len(f.imports)} imports, {len(f.exports)} exports)")

	lines.append("")
	lines.append("**Export patterns:**")
	lines.extend(_histogram(Counter(str(e.kind) for f in result.files for e in f.exports)))
	lines.append("")
	lines.append("**Import patterns:**")
	lines.extend(_histogram(Counter(str(i.kind) for f in result.files for i in f.imports)))

	lines.append("")
	lines.append(f"**Question:** {question}")
	lines.append("")
	lines.append(
		"Please answer the question based on the codebase analysis above. "
		"Be specific and reference actual file names when possible."
	)
	return "\n".join(lines)
