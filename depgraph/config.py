"""Analysis options and process-wide settings."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_EXCLUDED_DIRECTORY_NAMES: FrozenSet[str] = frozenset(
	{".git", ".hg", ".svn", "node_modules", "dist", "build"}
)
DEFAULT_SOURCE_EXTENSIONS: FrozenSet[str] = frozenset({".ts", ".tsx", ".js", ".jsx"})
TYPE_DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")


class AnalysisConfig(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	excluded_directory_names: FrozenSet[str] = Field(
		default=DEFAULT_EXCLUDED_DIRECTORY_NAMES, alias="excludedDirectoryNames"
	)
	source_extensions: FrozenSet[str] = Field(
		default=DEFAULT_SOURCE_EXTENSIONS, alias="sourceExtensions"
	)
	include_type_declaration_files: bool = Field(
		default=False, alias="includeTypeDeclarationFiles"
	)

	@field_validator("source_extensions")
	@classmethod
	def _normalize_extensions(cls, value: FrozenSet[str]) -> FrozenSet[str]:
		normalized = set()
		for ext in value:
			ext = ext.strip().lower()
			if not ext:
				continue
			normalized.add(ext if ext.startswith(".") else "." + ext)
		return frozenset(normalized)

	def is_source_file(self, filename: str) -> bool:
		lowered = filename.lower()
		if not lowered.endswith(tuple(self.source_extensions)):
			return False
		if not self.include_type_declaration_files and lowered.endswith(TYPE_DECLARATION_SUFFIXES):
			return False
		return True


def load_analysis_config(path: Optional[str]) -> AnalysisConfig:
	"""Read an AnalysisConfig from a JSON file, or return the defaults."""
	if not path:
		return AnalysisConfig()
	return AnalysisConfig.model_validate_json(Path(path).read_text(encoding="utf-8"))


class Settings(BaseSettings):
	LOG_LEVEL: str = "INFO"
	MAX_WORKERS: int = 4

	API_HOST: str = "127.0.0.1"
	API_PORT: int = 8000

	model_config = SettingsConfigDict(env_prefix="DEPGRAPH_", extra="ignore", case_sensitive=False)


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
	return Settings()
