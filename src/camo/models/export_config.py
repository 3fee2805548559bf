from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from camo.core.exceptions import DuplicatePolicy


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class ExportConfig(BaseModel):
    """What to export, with which backend, and where to.

    Example (JSON):
        {
            "name": "frontend-types",
            "modules": ["myapp.api.types"],
            "backend": "typescript",
            "output": "web/src/types.ts"
        }
    """

    name: str = "camo-export"

    # Modules scanned for @camo declarations (in definition order).
    modules: List[str] = Field(default_factory=list)

    # Extra declarations by reference, e.g. "myapp.models:User". Exported after modules.
    targets: List[str] = Field(default_factory=list)

    backend: str = "typescript"

    # Mark every exported declaration with `export`, regardless of @camo(export=...).
    export_all: bool = False

    duplicate_policy: DuplicatePolicy = DuplicatePolicy.FAIL

    # None writes to stdout.
    output: Optional[str] = None

    log_level: LogLevel = "INFO"

    @field_validator("targets")
    @classmethod
    def _validate_targets(cls, targets: List[str]) -> List[str]:
        for target in targets:
            module_name, sep, name = target.partition(":")
            if not sep or not module_name or not name:
                raise ValueError(f"target {target!r} must look like 'package.module:Name'")
        return targets

    @model_validator(mode="after")
    def _validate_sources(self) -> "ExportConfig":
        if not self.modules and not self.targets:
            raise ValueError("at least one of modules or targets is required")
        return self
