"""Import and export classification over a tree-sitter syntax tree.

Every node is visited once, in document order, and mapped to a NodeCategory.
Imports are read from ``import_statement`` nodes. Exports come from two places:
the ``export_statement`` itself for re-exports and default expressions, and
the wrapped declaration for ``export function``/``export class``/... forms.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

from tree_sitter import Node, Tree

from .model import DEFAULT_EXPORT_NAME, ExportKind, ExportRecord, ImportKind, ImportRecord


class NodeCategory(Enum):
	IMPORT = "import"
	EXPORT = "export"
	FUNCTION = "function"
	CLASS = "class"
	VARIABLE = "variable"
	INTERFACE = "interface"
	TYPE_ALIAS = "type-alias"
	ENUM = "enum"
	NAMESPACE = "namespace"
	OTHER = "other"


NODE_CATEGORIES: Dict[str, NodeCategory] = {
	"import_statement": NodeCategory.IMPORT,
	"export_statement": NodeCategory.EXPORT,
	"function_declaration": NodeCategory.FUNCTION,
	"generator_function_declaration": NodeCategory.FUNCTION,
	"function_signature": NodeCategory.FUNCTION,
	"class_declaration": NodeCategory.CLASS,
	"abstract_class_declaration": NodeCategory.CLASS,
	"lexical_declaration": NodeCategory.VARIABLE,
	"variable_declaration": NodeCategory.VARIABLE,
	"interface_declaration": NodeCategory.INTERFACE,
	"type_alias_declaration": NodeCategory.TYPE_ALIAS,
	"enum_declaration": NodeCategory.ENUM,
	"internal_module": NodeCategory.NAMESPACE,
	"module": NodeCategory.NAMESPACE,
}

DECLARATION_EXPORT_KINDS: Dict[NodeCategory, Tuple[ExportKind, bool]] = {
	NodeCategory.FUNCTION: (ExportKind.FUNCTION, False),
	NodeCategory.CLASS: (ExportKind.CLASS, False),
	NodeCategory.VARIABLE: (ExportKind.NAMED, False),
	NodeCategory.INTERFACE: (ExportKind.INTERFACE, True),
	NodeCategory.TYPE_ALIAS: (ExportKind.TYPE, True),
	NodeCategory.ENUM: (ExportKind.NAMED, False),
	NodeCategory.NAMESPACE: (ExportKind.NAMESPACE, False),
}


def categorize(node: Node) -> NodeCategory:
	return NODE_CATEGORIES.get(node.type, NodeCategory.OTHER)


def _text(node: Node) -> str:
	return node.text.decode("utf-8")


def _string_value(node: Node) -> str:
	raw = _text(node)
	if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in "'\"`":
		return raw[1:-1]
	return raw


def _has_token(node: Node, token: str) -> bool:
	return any(not child.is_named and child.type == token for child in node.children)


def _first_child(node: Node, node_type: str) -> Optional[Node]:
	for child in node.named_children:
		if child.type == node_type:
			return child
	return None


def _specifier_binding(spec: Node) -> str:
	bound = spec.child_by_field_name("alias")
	if bound is None:
		bound = spec.child_by_field_name("name")
	if bound is None:
		return _text(spec)
	return _string_value(bound) if bound.type == "string" else _text(bound)


def classify_import(stmt: Node) -> Optional[ImportRecord]:
	"""Build the ImportRecord for one ``import_statement`` node."""
	require = _first_child(stmt, "import_require_clause")
	source = stmt.child_by_field_name("source")
	if source is None and require is not None:
		source = require.child_by_field_name("source")
	if source is None:
		return None
	specifier = _string_value(source)
	statement_type_only = _has_token(stmt, "type")

	if require is not None:
		alias = _first_child(require, "identifier")
		names = (_text(alias),) if alias is not None else ()
		return ImportRecord(
			specifier=specifier,
			names=names,
			kind=ImportKind.DEFAULT,
			is_type_only=statement_type_only,
		)

	clause = _first_child(stmt, "import_clause")
	if clause is None:
		return ImportRecord(
			specifier=specifier,
			kind=ImportKind.SIDE_EFFECT,
			is_type_only=statement_type_only,
		)

	names: List[str] = []
	has_default = has_namespace = has_braces = False
	typed_specifiers = 0
	specifier_count = 0
	for child in clause.named_children:
		if child.type == "identifier":
			has_default = True
			names.append(_text(child))
		elif child.type == "namespace_import":
			has_namespace = True
			alias = _first_child(child, "identifier")
			if alias is not None:
				names.append(_text(alias))
		elif child.type == "named_imports":
			has_braces = True
			for spec in child.named_children:
				if spec.type != "import_specifier":
					continue
				specifier_count += 1
				if _has_token(spec, "type"):
					typed_specifiers += 1
				names.append(_specifier_binding(spec))

	if has_namespace:
		kind = ImportKind.NAMESPACE
	elif has_braces:
		kind = ImportKind.NAMED
	else:
		kind = ImportKind.DEFAULT

	only_typed_specifiers = (
		specifier_count > 0
		and typed_specifiers == specifier_count
		and not has_default
		and not has_namespace
	)
	return ImportRecord(
		specifier=specifier,
		names=tuple(names),
		kind=kind,
		is_type_only=statement_type_only or only_typed_specifiers,
	)


def _enclosing_export(node: Node) -> Optional[Node]:
	parent = node.parent
	if parent is not None and parent.type == "ambient_declaration":
		parent = parent.parent
	if parent is not None and parent.type == "export_statement":
		return parent
	return None


def _declared_name(node: Node, category: NodeCategory) -> Optional[str]:
	if category is NodeCategory.VARIABLE:
		# Only the first declarator of `export const a = 1, b = 2` is recorded.
		declarator = _first_child(node, "variable_declarator")
		if declarator is None:
			return None
		name = declarator.child_by_field_name("name")
		if name is None or name.type != "identifier":
			return None
		return _text(name)
	name = node.child_by_field_name("name")
	if name is None:
		return None
	return _string_value(name) if name.type == "string" else _text(name)


def classify_exported_declaration(node: Node, category: NodeCategory) -> Optional[ExportRecord]:
	"""ExportRecord for a declaration wrapped in an export statement, if any."""
	export = _enclosing_export(node)
	if export is None:
		return None
	if _has_token(export, "default"):
		return ExportRecord(name=DEFAULT_EXPORT_NAME, kind=ExportKind.DEFAULT)
	kind, type_only = DECLARATION_EXPORT_KINDS[category]
	name = _declared_name(node, category)
	if name is None:
		return None
	return ExportRecord(name=name, kind=kind, is_type_only=type_only)


def classify_export_statement(stmt: Node) -> List[ExportRecord]:
	"""ExportRecords carried by the statement itself rather than a declaration."""
	if stmt.child_by_field_name("declaration") is not None:
		return []

	statement_type_only = _has_token(stmt, "type")
	clause = _first_child(stmt, "export_clause")
	if clause is not None:
		records = []
		for spec in clause.named_children:
			if spec.type != "export_specifier":
				continue
			records.append(
				ExportRecord(
					name=_specifier_binding(spec),
					kind=ExportKind.NAMED,
					is_type_only=statement_type_only or _has_token(spec, "type"),
				)
			)
		return records

	namespace_export = _first_child(stmt, "namespace_export")
	if namespace_export is not None:
		alias = namespace_export.named_children[-1] if namespace_export.named_children else None
		name = "*"
		if alias is not None:
			name = _string_value(alias) if alias.type == "string" else _text(alias)
		return [ExportRecord(name=name, kind=ExportKind.NAMESPACE, is_type_only=statement_type_only)]

	if _has_token(stmt, "*"):
		return [ExportRecord(name="*", kind=ExportKind.NAMESPACE, is_type_only=statement_type_only)]

	if _has_token(stmt, "import"):
		# `export import A = N.B` aliases a namespace member; nothing is recorded.
		return []

	if _has_token(stmt, "default") or _has_token(stmt, "="):
		return [ExportRecord(name=DEFAULT_EXPORT_NAME, kind=ExportKind.DEFAULT)]

	if _has_token(stmt, "as") and _has_token(stmt, "namespace"):
		alias = _first_child(stmt, "identifier")
		if alias is not None:
			return [ExportRecord(name=_text(alias), kind=ExportKind.NAMESPACE)]
	return []


def extract_declarations(tree: Tree) -> Tuple[List[ImportRecord], List[ExportRecord]]:
	"""Walk the whole tree and return its (imports, exports) in source order."""
	imports: List[ImportRecord] = []
	exports: List[ExportRecord] = []
	seen_exports = set()

	def add_export(record: Optional[ExportRecord]) -> None:
		if record is None:
			return
		key = (record.name, record.kind, record.is_type_only)
		if key not in seen_exports:
			seen_exports.add(key)
			exports.append(record)

	# Explicit stack instead of recursion; generated bundles can nest deeply.
	stack = [tree.root_node]
	while stack:
		node = stack.pop()
		category = categorize(node)
		if category is NodeCategory.IMPORT:
			record = classify_import(node)
			if record is not None:
				imports.append(record)
		elif category is NodeCategory.EXPORT:
			for record in classify_export_statement(node):
				add_export(record)
		elif category is not NodeCategory.OTHER:
			add_export(classify_exported_declaration(node, category))
		stack.extend(reversed(node.children))

	return imports, exports
