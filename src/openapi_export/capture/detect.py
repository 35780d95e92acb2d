"""Auto-detect capture file format."""

import json
from pathlib import Path

import yaml


def detect_format(file_path: Path) -> str:
    """Detect the format of a capture file.

    Returns: 'postman' or 'native'.
    """
    text = file_path.read_text(encoding="utf-8")

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        # Try JSON specifically (for files not parseable as YAML)
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, ValueError):
            return "native"

    if _is_postman(data):
        return "postman"
    return "native"


def _is_postman(data) -> bool:
    if not isinstance(data, dict):
        return False
    info = data.get("info")
    if not isinstance(info, dict):
        return False
    return "_postman_id" in info or "postman" in str(info.get("schema", "")).lower()
