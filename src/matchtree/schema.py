"""Generate JSON Schema and docs for the check-file YAML format."""

from __future__ import annotations

import json
from graphlib import TopologicalSorter
from pathlib import Path

from matchtree.config import CheckFile
from matchtree.expressions import bare_names, operator_names


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


_REF_PREFIX = "#/$defs/"


def _refs_in(node: object) -> set[str]:
    """Names of the ``$defs`` entries that ``node`` points at."""
    found: set[str] = set()
    stack = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, list):
            stack.extend(item)
        elif isinstance(item, dict):
            ref = item.get("$ref")
            if isinstance(ref, str) and ref.startswith(_REF_PREFIX):
                found.add(ref[len(_REF_PREFIX):])
            stack.extend(item.values())
    return found


def _dependencies_first(defs: dict) -> dict:
    """Reorder ``$defs`` so every definition follows the ones it uses."""
    graph = {name: _refs_in(body) & (defs.keys() - {name}) for name, body in defs.items()}
    return {name: defs[name] for name in TopologicalSorter(graph).static_order()}


def generate_json_schema() -> dict:
    schema = CheckFile.model_json_schema()
    if "$defs" in schema:
        schema["$defs"] = _dependencies_first(schema["$defs"])
    return schema


def write_json_schema(path: Path) -> None:
    _ensure_parent(path)
    schema = generate_json_schema()
    path.write_text(json.dumps(schema, indent=2) + "\n")


def generate_schema_doc() -> str:
    check_props = generate_json_schema().get("$defs", {}).get("CheckConfig", {})
    fields = ", ".join(check_props.get("properties", {}))

    lines = [
        "# matchtree check file",
        "",
        "This doc is generated from the Pydantic models.",
        "",
        "## Top-level keys",
        "- `checks`: list of checks (required, non-empty, unique names).",
        "",
        "## Check",
        f"- fields: {fields}",
        "- `mode`: one of check, assert, log",
        "",
        "## Bare names",
        "`true` and `false` may be left unquoted.",
        "",
    ]
    lines.extend(f"- `{name}`" for name in bare_names())
    lines.extend(["", "## Expression operators"])
    lines.extend(f"- `{name}`" for name in operator_names())
    lines.append("")
    return "\n".join(lines)


def write_schema_doc(path: Path) -> None:
    _ensure_parent(path)
    path.write_text(generate_schema_doc())
