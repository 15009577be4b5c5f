"""
Pydantic models for envresolve configuration.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_ENV_FILE


class LoadOptions(BaseModel):
    """
    Options describing which dotenv files to load and how to combine them.

    :ivar files: Dotenv file paths in precedence order; later files override earlier ones.
    :vartype files: list[str]
    :ivar interpolate: Whether to expand variable references after merging.
    :vartype interpolate: bool
    :ivar merge_with_process: Whether to start from the process environment before
        layering the files on top.
    :vartype merge_with_process: bool
    :ivar required_files: Whether a missing file is an error instead of being skipped.
    :vartype required_files: bool
    """

    model_config = ConfigDict(extra="forbid")

    files: List[str] = Field(default_factory=lambda: [DEFAULT_ENV_FILE], min_length=1)
    interpolate: bool = True
    merge_with_process: bool = False
    required_files: bool = False

    @field_validator("files")
    @classmethod
    def _reject_blank_paths(cls, files: List[str]) -> List[str]:
        for path in files:
            if not path.strip():
                raise ValueError("Load option files must be non-empty paths")
        return files
