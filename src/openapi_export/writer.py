"""Serialise OpenAPI documents to JSON or YAML."""

import json
from pathlib import Path

import yaml


def detect_output_format(file_path: Path) -> str:
    """Return 'yaml' for .yaml/.yml files, 'json' otherwise."""
    if file_path.suffix.lower() in (".yaml", ".yml"):
        return "yaml"
    return "json"


def render_document(document: dict, fmt: str) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def write_document(document: dict, file_path: Path, fmt: str = "auto") -> str:
    """Write ``document`` to ``file_path``; returns the format used."""
    if fmt == "auto":
        fmt = detect_output_format(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(render_document(document, fmt), encoding="utf-8")
    return fmt
