from __future__ import annotations

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_EXPORT_NAME = "default"


class ImportKind(str, Enum):
	DEFAULT = "default"
	NAMED = "named"
	NAMESPACE = "namespace"
	SIDE_EFFECT = "side-effect"


class ExportKind(str, Enum):
	DEFAULT = "default"
	NAMED = "named"
	NAMESPACE = "namespace"
	FUNCTION = "function"
	CLASS = "class"
	INTERFACE = "interface"
	TYPE = "type"


class EdgeOrigin(str, Enum):
	IMPORT = "import"
	EXPORT = "export"


class WarningKind(str, Enum):
	SUBTREE_READ = "subtree-read"
	FILE_READ = "file-read"
	PARSE = "parse"


class Record(BaseModel):
	model_config = ConfigDict(
		frozen=True, populate_by_name=True, use_enum_values=True, validate_default=True
	)


class ImportRecord(Record):
	specifier: str
	names: Tuple[str, ...] = ()
	kind: ImportKind
	is_type_only: bool = Field(default=False, alias="isTypeOnly")


class ExportRecord(Record):
	name: str
	kind: ExportKind
	is_type_only: bool = Field(default=False, alias="isTypeOnly")


class FileRecord(Record):
	path: str
	imports: Tuple[ImportRecord, ...] = ()
	exports: Tuple[ExportRecord, ...] = ()

	@field_validator("path")
	@classmethod
	def _root_relative(cls, value: str) -> str:
		# Separators are normalized during discovery; a backslash left here is
		# part of a POSIX file name.
		if value.startswith("/"):
			raise ValueError(f"path must be root-relative: {value!r}")
		if ".." in value.split("/"):
			raise ValueError(f"path must not leave the root: {value!r}")
		return value


class DependencyEdge(Record):
	from_path: str = Field(alias="from")
	to: str
	origin: EdgeOrigin = EdgeOrigin.IMPORT
	kind: ImportKind
	names: Tuple[str, ...] = ()
	is_type_only: bool = Field(default=False, alias="isTypeOnly")


class Summary(Record):
	total_files: int = Field(alias="totalFiles")
	total_dependencies: int = Field(alias="totalDependencies")


class AnalysisWarning(Record):
	kind: WarningKind
	path: str
	message: str


class AnalysisResult(Record):
	files: Tuple[FileRecord, ...] = ()
	dependencies: Tuple[DependencyEdge, ...] = ()
	summary: Summary
	warnings: Tuple[AnalysisWarning, ...] = ()
	truncated: bool = False

	def to_json(self, indent: int = 2) -> str:
		return self.model_dump_json(by_alias=True, indent=indent)
