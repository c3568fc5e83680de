from __future__ import annotations


class AnalysisError(Exception):
	"""Base class for errors raised by the analyzer."""


class DiscoveryError(AnalysisError):
	"""The analysis root is missing, not a directory, or unreadable."""

	def __init__(self, path: str, reason: str) -> None:
		super().__init__(f"Cannot read root directory {path}: {reason}")
		self.path = path
		self.reason = reason


class ParseError(AnalysisError):
	"""A source file could not be turned into a clean syntax tree."""

	def __init__(self, path: str, line: int = 0, column: int = 0) -> None:
		super().__init__(f"Syntax error in {path} at {line}:{column}")
		self.path = path
		self.line = line
		self.column = column
