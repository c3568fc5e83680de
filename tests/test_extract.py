from textwrap import dedent

import pytest

from depgraph.extract import NodeCategory, categorize, extract_declarations
from depgraph.ts_parse import parse_source


def _extract(code, path="m.ts"):
	tree = parse_source(path, dedent(code))
	return extract_declarations(tree)


def _exports(code, path="m.ts"):
	return [(e.name, e.kind, e.is_type_only) for e in _extract(code, path)[1]]


def test_import_kinds():
	imports, _ = _extract(
		"""
		import React from 'react';
		import { a, b as c } from './ab';
		import * as utils from '../utils';
		import './styles.css';
		"""
	)
	assert [(i.specifier, i.kind, i.names) for i in imports] == [
		("react", "default", ("React",)),
		("./ab", "named", ("a", "c")),
		("../utils", "namespace", ("utils",)),
		("./styles.css", "side-effect", ()),
	]
	assert not any(i.is_type_only for i in imports)


def test_type_only_import():
	imports, _ = _extract("import type { T } from './types';\n")
	assert len(imports) == 1
	assert imports[0].is_type_only is True
	assert imports[0].kind == "named"
	assert imports[0].names == ("T",)


def test_inline_type_specifiers():
	imports, _ = _extract(
		"""
		import { type A, type B } from './only-types';
		import { type C, value } from './mixed';
		"""
	)
	assert imports[0].is_type_only is True
	assert imports[1].is_type_only is False


def test_default_with_named_and_namespace():
	imports, _ = _extract(
		"""
		import React, { useState } from 'react';
		import def, * as ns from './mod';
		"""
	)
	assert imports[0].kind == "named"
	assert imports[0].names == ("React", "useState")
	assert imports[1].kind == "namespace"
	assert imports[1].names == ("def", "ns")


def test_import_require():
	imports, _ = _extract("import fs = require('./fs-shim');\n")
	assert imports[0].specifier == "./fs-shim"
	assert imports[0].kind == "default"
	assert imports[0].names == ("fs",)


def test_imports_keep_duplicates_in_order():
	imports, _ = _extract(
		"""
		import { a } from './x';
		import { b } from './x';
		"""
	)
	assert [i.names for i in imports] == [("a",), ("b",)]


def test_declaration_exports():
	exports = _exports(
		"""
		export function foo() {}
		export class Bar {}
		export abstract class Base {}
		export const x = 1, y = 2;
		export interface Shape { w: number }
		export type Id = string;
		export enum Color { Red }
		"""
	)
	assert exports == [
		("foo", "function", False),
		("Bar", "class", False),
		("Base", "class", False),
		("x", "named", False),
		("Shape", "interface", True),
		("Id", "type", True),
		("Color", "named", False),
	]


def test_destructured_variable_export_is_skipped():
	assert _exports("export const { a, b } = obj;\n") == []


def test_default_exports():
	assert _exports("export default function main() {}\n") == [("default", "default", False)]
	assert _exports("export default class {}\n") == [("default", "default", False)]
	assert _exports("const x = 1;\nexport default x;\n") == [("default", "default", False)]


def test_re_exports():
	exports = _exports(
		"""
		export { a, b as c } from './m';
		export * from './all';
		export * as ns from './ns';
		export type { T } from './types';
		"""
	)
	assert exports == [
		("a", "named", False),
		("c", "named", False),
		("*", "namespace", False),
		("ns", "namespace", False),
		("T", "named", True),
	]


def test_local_export_clause():
	exports = _exports("const a = 1;\nconst b = 2;\nexport { a, b as bee };\n")
	assert exports == [("a", "named", False), ("bee", "named", False)]


def test_overloads_recorded_once():
	exports = _exports(
		"""
		export function f(a: string): void;
		export function f(a: number): void;
		export function f(a: any) {}
		"""
	)
	assert exports == [("f", "function", False)]


def test_unexported_declarations_ignored():
	imports, exports = _extract(
		"""
		function helper() {}
		class Internal {}
		const y = 2;
		"""
	)
	assert imports == []
	assert exports == []


def test_tsx_component():
	imports, exports = _extract(
		"""
		import React from 'react';
		import { Button } from './Button';

		export function App(props: { title: string }) {
			return <div className="app"><Button label={props.title} /></div>;
		}
		""",
		path="App.tsx",
	)
	assert [i.specifier for i in imports] == ["react", "./Button"]
	assert exports[0].name == "App"
	assert exports[0].kind == "function"


def test_plain_javascript():
	imports, exports = _extract(
		"""
		import x from './x.js';
		export const y = () => x;
		""",
		path="m.js",
	)
	assert imports[0].specifier == "./x.js"
	assert exports[0].name == "y"


def test_categorize():
	tree = parse_source("m.ts", "import './a';\nexport const v = 1;\nlet z = 3;\n")
	kinds = [categorize(node) for node in tree.root_node.named_children]
	assert kinds == [NodeCategory.IMPORT, NodeCategory.EXPORT, NodeCategory.VARIABLE]
	assert categorize(tree.root_node) is NodeCategory.OTHER


@pytest.mark.parametrize(
	"code, expected",
	[
		("const x = 1;\nexport = x;\n", [("default", "default", False)]),
		("export as namespace MyLib;\n", [("MyLib", "namespace", False)]),
		("export namespace Shapes { export const n = 1; }\n", [("Shapes", "namespace", False), ("n", "named", False)]),
		("export declare const v: number;\n", [("v", "named", False)]),
		("export declare function f(a: string): void;\n", [("f", "function", False)]),
		("export function* ids() { yield 1; }\n", [("ids", "function", False)]),
	],
)
def test_export_shapes(code, expected):
	assert _exports(code) == expected


@pytest.mark.parametrize(
	"code, expected",
	[
		("import type * as ns from './ns';\n", ("./ns", "namespace", ("ns",), True)),
		("import { default as X } from './x';\n", ("./x", "named", ("X",), False)),
		("import type Def from './d';\n", ("./d", "default", ("Def",), True)),
		("import { a as b, c } from './m';\n", ("./m", "named", ("b", "c"), False)),
	],
)
def test_import_shapes(code, expected):
	imports, _ = _extract(code)
	assert [(i.specifier, i.kind, i.names, i.is_type_only) for i in imports] == [expected]
