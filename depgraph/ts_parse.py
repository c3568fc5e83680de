from __future__ import annotations

from typing import Dict, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from .errors import ParseError


TYPESCRIPT_SUFFIXES = (".ts", ".mts", ".cts")

_LANGUAGES: Dict[str, Language] = {
	"typescript": Language(tree_sitter_typescript.language_typescript()),
	"tsx": Language(tree_sitter_typescript.language_tsx()),
}


def grammar_for(path: str) -> str:
	# The TSX grammar also covers plain JavaScript and JSX.
	if path.lower().endswith(TYPESCRIPT_SUFFIXES):
		return "typescript"
	return "tsx"


def _first_error(node: Node) -> Optional[Node]:
	stack = [node]
	while stack:
		current = stack.pop()
		if current.is_error or current.is_missing:
			return current
		if current.has_error:
			stack.extend(reversed(current.children))
	return None


def parse_source(path: str, text: str) -> Tree:
	"""Parse one file's text, raising ParseError if the grammar rejects any of it."""
	# Parsers are not shared so that files can be parsed from several threads.
	parser = Parser(_LANGUAGES[grammar_for(path)])
	tree = parser.parse(text.encode("utf-8"))
	if tree.root_node.has_error:
		bad = _first_error(tree.root_node) or tree.root_node
		line, column = bad.start_point
		raise ParseError(path, line + 1, column + 1)
	return tree
