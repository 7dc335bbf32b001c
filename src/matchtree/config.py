from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from matchtree.base import Matcher
from matchtree.expressions import build_matcher


def _expand(value: Any, path: str, missing: list[str]) -> Any:
    """Expand ${VAR} references in every string inside ``value``."""
    if isinstance(value, str):
        try:
            return expandvars(value, nounset=True)
        except Exception:
            # Variable is missing and has no default
            missing.append(f"  {path}={value}")
            return value
    if isinstance(value, list):
        return [_expand(v, f"{path}[{i}]", missing) for i, v in enumerate(value)]
    if isinstance(value, dict):
        return {k: _expand(v, f"{path}.{k}", missing) for k, v in value.items()}
    return value


class CheckConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    value: Any = None
    expect: Any
    comments: list[str] = []
    mode: Literal["check", "assert", "log"] = "check"

    @model_validator(mode="before")
    @classmethod
    def expand_env_variables(cls, data: Any) -> Any:
        """Expand ${VAR} references in ``value``, ``expect`` and ``comments``.

        Raises ValueError listing every missing variable so the user can fix them
        all at once rather than hitting them one-by-one mid-run.
        """
        if not isinstance(data, dict):
            return data
        missing: list[str] = []
        expanded = dict(data)
        for key in ("value", "expect", "comments"):
            if key in expanded:
                expanded[key] = _expand(expanded[key], key, missing)

        if missing:
            details = "\n".join(missing)
            raise ValueError(
                f"Check '{data.get('name')}' has missing environment variables:\n{details}"
            )

        return expanded

    @field_validator("name")
    @classmethod
    def no_commas_in_name(cls, v: str) -> str:
        if "," in v:
            raise ValueError(f"Check name '{v}' must not contain a comma")
        return v

    @field_validator("expect")
    @classmethod
    def expect_must_build(cls, v: Any) -> Any:
        build_matcher(v)
        return v

    def matcher(self) -> Matcher:
        """Build the matcher for this check, with its comments attached."""
        built = build_matcher(self.expect)
        if self.comments:
            built = built.comment(*self.comments)
        return built


class CheckFile(BaseModel):
    model_config = ConfigDict(extra="forbid")
    checks: list[CheckConfig]

    @field_validator("checks")
    @classmethod
    def checks_must_not_be_empty(cls, v: list[CheckConfig]) -> list[CheckConfig]:
        if not v:
            raise ValueError("checks must not be empty")
        return v

    @model_validator(mode="after")
    def names_must_be_unique(self) -> CheckFile:
        seen: set[str] = set()
        for check in self.checks:
            if check.name in seen:
                raise ValueError(f"Duplicate check name '{check.name}'")
            seen.add(check.name)
        return self


def load_config(path: Path) -> CheckFile:
    """Load and validate a check file from YAML."""
    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping with a 'checks' key")

    return CheckFile(**raw)
