"""URL model: origin, port, and path template of a captured request.

A concrete URL such as ``http://api.test/v1/users/42/`` is turned into the
origin ``http://api.test/`` and the path template ``/v1/users/{userId}/``
by substituting the request's path parameters back into the path.

Substitution runs in the order the parameters are declared. Each step
rewrites the path that later steps search, so when two defaults overlap
(``1`` and ``11``) the earlier parameter claims its segment first.
"""

import re
from urllib.parse import unquote

from pydantic import BaseModel, ConfigDict

from openapi_export.errors import ParamNotReplaceableError, UnparseableUrlError

from .collaborators import ParameterObject

URL_PATTERN = re.compile(r"^(?:([^:/]+)://|(?![^:/]*://))([^:/]+)(?::([0-9]*))?(/.*)?$", re.IGNORECASE)

DEFAULT_SCHEME = "http"

# Escapes of ; / ? : @ & = + $ , # stay encoded when decoding a path.
RESERVED_ESCAPE = re.compile(r"(%(?:2[346BCFbcf]|3[ABDFabdf]|40))")


def decode_uri(path: str) -> str:
    """Percent-decode ``path`` except for reserved characters."""
    parts = RESERVED_ESCAPE.split(path)
    # split() with a capture group puts the kept escapes at odd indexes
    return "".join(part if i % 2 else unquote(part) for i, part in enumerate(parts))


def add_slash_at_end(value: str) -> str:
    if not value.endswith("/"):
        value = f"{value}/"
    return value


def replace_path_param(path: str, value: str, name: str) -> str:
    """Replace the first ``/value/`` segment of ``path`` with ``/{name}/``."""
    literal = f"/{value}/"
    if literal not in path:
        raise ParamNotReplaceableError(f"{literal!r} not found in {path!r}")
    return path.replace(literal, f"/{{{name}}}/", 1)


def add_path_param(path: str, name: str) -> str:
    return f"{path}{{{name}}}/"


def _default_as_segment(value) -> str:
    """Return the literal segment a default stands for ('' when empty)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value) if value else ""


def apply_path_parameters(path: str, parameters: list[ParameterObject]) -> str:
    """Turn literal path segments into ``{name}`` placeholders."""
    for param in parameters:
        if param.location != "path" or not param.name or not param.has_default:
            continue
        if f"{{{param.name}}}" in path:
            continue

        # An empty value leaves "//" in the captured path; claim that instead.
        segment = _default_as_segment(param.default)
        try:
            path = replace_path_param(path, segment, param.name)
        except ParamNotReplaceableError:
            path = add_path_param(path, param.name)
    return path


class PathTemplate(BaseModel):
    """Parsed base URL with path parameters substituted."""

    model_config = ConfigDict(frozen=True)

    origin: str
    port: str | None = None
    pathname: str

    @classmethod
    def parse(cls, url: str, parameters: list[ParameterObject] | None = None) -> "PathTemplate":
        """Parse ``url`` and apply ``parameters``.

        Raises UnparseableUrlError when no host can be found.
        """
        match = URL_PATTERN.match(url or "")
        if not match or not match.group(2):
            raise UnparseableUrlError(url)

        scheme, host, port, path = match.groups()
        origin = add_slash_at_end(f"{scheme or DEFAULT_SCHEME}://{host}")
        pathname = decode_uri(add_slash_at_end(path)) if path else "/"

        return cls(
            origin=origin,
            port=port or None,
            pathname=apply_path_parameters(pathname, parameters or []),
        )

    @property
    def server_url(self) -> str:
        """Origin with the port re-attached, when the URL had one."""
        if not self.port:
            return self.origin
        return f"{self.origin.rstrip('/')}:{self.port}/"
