"""Dependency graph extraction for TypeScript and JavaScript source trees.

Modules:
- fs_scan.py: Source file discovery.
- ts_parse.py: tree-sitter parsing of TS/TSX/JS/JSX files.
- extract.py: Import and export classification.
- graph.py: Local dependency edges.
- aggregate.py: Counts and the final result object.
- pipeline.py: The analyze_repository entry point.
- model.py: Data structures for records, edges and results.
- summarize.py: Text summaries and prompt context for display and querying.
"""

from .config import AnalysisConfig
from .errors import AnalysisError, DiscoveryError, ParseError
from .model import AnalysisResult, DependencyEdge, ExportRecord, FileRecord, ImportRecord
from .pipeline import analyze_repository

__all__ = [
	"AnalysisConfig",
	"AnalysisError",
	"AnalysisResult",
	"DependencyEdge",
	"DiscoveryError",
	"ExportRecord",
	"FileRecord",
	"ImportRecord",
	"ParseError",
	"analyze_repository",
]
