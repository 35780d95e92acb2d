"""Postman Collection v2.1 loader.

Parses Postman exported JSON files into a CapturedDocument.
"""

import json
import re
from pathlib import Path
from urllib.parse import parse_qsl

from openapi_export.errors import CaptureFormatError

from .base import AuthConfig, CapturedDocument, CapturedRequest, CapturedResponse, KeyValue

PM_VAR = re.compile(r"{{\s*([A-Za-z0-9_.\-]+)\s*}}")

RAW_LANGUAGE_TYPES = {
    "json": "application/json",
    "xml": "application/xml",
    "html": "text/html",
    "javascript": "application/javascript",
    "text": "text/plain",
}


def parse_postman(file_path: Path) -> CapturedDocument:
    """Parse a Postman Collection v2.1 file into a CapturedDocument."""
    text = file_path.read_text(encoding="utf-8")
    try:
        collection = json.loads(text)
    except json.JSONDecodeError as e:
        raise CaptureFormatError(file_path, f"invalid JSON: {e.msg} (line {e.lineno})") from e
    if not isinstance(collection, dict):
        raise CaptureFormatError(file_path, "a Postman collection must be a JSON object")

    variables = _collection_variables(collection)
    requests: list[CapturedRequest] = []
    _parse_items(collection.get("item", []), requests, variables, collection.get("auth"))

    return CapturedDocument(
        name=collection.get("info", {}).get("name"),
        requests=requests,
    )


def _collection_variables(collection: dict) -> dict[str, str]:
    out = {}
    for v in collection.get("variable") or []:
        key = v.get("key") or v.get("id")
        if key and v.get("value") is not None:
            out[str(key)] = str(v["value"])
    return out


def _parse_items(items: list[dict], requests: list[CapturedRequest], variables: dict, auth: dict | None) -> None:
    """Recursively parse items (supports folders and inherited auth)."""
    for item in items:
        if "item" in item:
            _parse_items(item["item"], requests, variables, item.get("auth") or auth)
        elif "request" in item:
            requests.append(_parse_request(item, variables, auth))


def _parse_request(item: dict, variables: dict, inherited_auth: dict | None) -> CapturedRequest:
    req = item["request"]
    if isinstance(req, str):
        req = {"url": req, "method": "GET"}

    url = req.get("url", "")
    url_obj = url if isinstance(url, dict) else {}
    raw = url if isinstance(url, str) else (url.get("raw") or _join_url(url))
    raw = _resolve(raw, variables)

    base, _, query_string = raw.partition("?")
    base = base.split("#")[0]
    query_string = query_string.split("#")[0]

    path_variables = [
        KeyValue(
            key=v["key"],
            value=_resolve(v.get("value"), variables),
            description=_description(v.get("description")),
        )
        for v in url_obj.get("variable", [])
        if v.get("key")
    ]
    body, content_type = _parse_body(req.get("body"), variables)

    return CapturedRequest(
        name=item.get("name", ""),
        description=_description(req.get("description")) or None,
        method=req.get("method", "GET").upper(),
        url=_substitute_path_variables(base, path_variables),
        headers=_parse_key_values(req.get("header", []), variables),
        query=_parse_query(url_obj, query_string, variables),
        path_variables=path_variables,
        body=body,
        body_content_type=content_type,
        auth=_parse_auth(req.get("auth") or inherited_auth, variables),
        responses=[_parse_response(r) for r in item.get("response", [])],
    )


def _join_url(url: dict) -> str:
    host = url.get("host", "")
    if isinstance(host, list):
        host = ".".join(host)
    path = url.get("path", "")
    if isinstance(path, list):
        path = "/".join(path)
    port = f":{url['port']}" if url.get("port") else ""
    protocol = f"{url['protocol']}://" if url.get("protocol") else ""
    return f"{protocol}{host}{port}/{path}"


def _as_text(value) -> str | None:
    """Postman stores numbers, booleans and objects in value fields too."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def _resolve(value, variables: dict) -> str | None:
    value = _as_text(value)
    if value is None:
        return None
    return PM_VAR.sub(lambda m: variables.get(m.group(1), m.group(0)), value)


def _substitute_path_variables(base: str, path_variables: list[KeyValue]) -> str:
    """Replace `:name` segments with captured values so the URL is concrete."""
    for var in path_variables:
        pattern = re.compile(r"/:" + re.escape(var.key) + r"(?=/|$)")
        base = pattern.sub(lambda _: "/" + (var.value or ""), base, count=1)
    return base


def _description(desc) -> str:
    if isinstance(desc, dict):
        return desc.get("content", "")
    return desc or ""


def _parse_key_values(entries, variables: dict) -> list[KeyValue]:
    if not isinstance(entries, list):
        return []
    return [
        KeyValue(
            key=e["key"],
            value=_resolve(e.get("value"), variables),
            description=_description(e.get("description")),
            disabled=e.get("disabled", False),
        )
        for e in entries
        if e.get("key")
    ]


def _parse_query(url_obj: dict, query_string: str, variables: dict) -> list[KeyValue]:
    if "query" in url_obj:
        return _parse_key_values(url_obj["query"], variables)
    return [
        KeyValue(key=k, value=v)
        for k, v in parse_qsl(query_string, keep_blank_values=True)
    ]


def _parse_body(body: dict | None, variables: dict) -> tuple[object, str | None]:
    if not body or body.get("disabled"):
        return None, None

    mode = body.get("mode")
    if mode == "raw":
        raw = _resolve(body.get("raw", ""), variables)
        if not raw:
            return None, None
        language = body.get("options", {}).get("raw", {}).get("language", "text")
        try:
            return json.loads(raw), "application/json"
        except json.JSONDecodeError:
            return raw, RAW_LANGUAGE_TYPES.get(language, "text/plain")
    if mode == "urlencoded":
        fields = {kv.key: kv.value for kv in _parse_key_values(body.get("urlencoded", []), variables) if not kv.disabled}
        return fields or None, "application/x-www-form-urlencoded"
    if mode == "formdata":
        fields = {}
        for entry in body.get("formdata", []):
            if entry.get("disabled") or not entry.get("key"):
                continue
            value = entry.get("src") if entry.get("type") == "file" else entry.get("value")
            fields[entry["key"]] = _resolve(value, variables)
        return fields or None, "multipart/form-data"
    if mode == "graphql":
        return body.get("graphql") or None, "application/json"
    return None, None


def _parse_auth(auth: dict | None, variables: dict) -> AuthConfig | None:
    if not auth or not auth.get("type"):
        return None
    auth_type = auth["type"]
    entries = auth.get(auth_type, [])
    if isinstance(entries, dict):
        values = {k: _resolve(v, variables) for k, v in entries.items()}
    else:
        values = {e["key"]: _resolve(e.get("value"), variables) for e in entries if e.get("key")}
    return AuthConfig(type=auth_type, values=values)


def _parse_response(resp: dict) -> CapturedResponse:
    content_type = None
    for h in resp.get("header") or []:
        if isinstance(h, dict) and h.get("key", "").lower() == "content-type":
            content_type = h.get("value", "").split(";")[0].strip() or None

    body = resp.get("body")
    if body:
        try:
            body = json.loads(body)
            content_type = content_type or "application/json"
        except (json.JSONDecodeError, TypeError):
            pass

    return CapturedResponse(
        status=resp.get("code"),
        name=resp.get("name", ""),
        body=body or None,
        content_type=content_type,
    )
