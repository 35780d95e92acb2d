"""Native capture loader.

Reads YAML or JSON files that already follow the CapturedDocument model.
"""

from pathlib import Path
from urllib.parse import parse_qsl

import yaml
from pydantic import ValidationError

from openapi_export.errors import CaptureFormatError

from .base import CapturedDocument


def parse_native(file_path: Path) -> CapturedDocument:
    """Parse a YAML/JSON capture file into a CapturedDocument.

    A bare list at the top level is read as the request list.
    """
    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CaptureFormatError(file_path, f"invalid YAML/JSON: {e}") from e

    if isinstance(data, list):
        data = {"requests": data}
    if not isinstance(data, dict):
        raise CaptureFormatError(file_path, "expected a mapping with a 'requests' list")

    for request in data.get("requests") or []:
        if isinstance(request, dict):
            _split_query(request)

    try:
        return CapturedDocument.model_validate(data)
    except ValidationError as e:
        raise CaptureFormatError(file_path, str(e)) from e


def _split_query(request: dict) -> None:
    """Move a ``?query`` left in ``url`` into the request's query entries."""
    url = request.get("url")
    if not isinstance(url, str):
        return
    base, _, query_string = url.split("#")[0].partition("?")
    request["url"] = base
    if not query_string:
        return
    query = list(request.get("query") or [])
    known = {q.get("key") for q in query if isinstance(q, dict)}
    for key, value in parse_qsl(query_string, keep_blank_values=True):
        if key not in known:
            query.append({"key": key, "value": value})
    request["query"] = query
