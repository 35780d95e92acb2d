"""Derive OpenAPI parameters from a captured request."""

from openapi_export.capture.base import CapturedRequest, KeyValue

from .collaborators import BoundParameters, ParameterObject

# Carried by the operation's security and requestBody instead.
HEADER_PARAM_DENYLIST = {"authorization", "content-type", "cookie"}

DEFAULT_JSON_CONTENT_TYPE = "application/json"
DEFAULT_TEXT_CONTENT_TYPE = "text/plain"


class RequestParameterBinder:
    """Builds the ordered parameter list for one request.

    Path variables come first, in declaration order, then query entries,
    headers and cookies.
    """

    def bind(self, request: CapturedRequest) -> BoundParameters:
        parameters: list[ParameterObject] = []
        parameters.extend(_path_params(request.path_variables))
        parameters.extend(_simple_params(request.query, "query"))
        parameters.extend(
            _simple_params(
                [h for h in request.headers if h.key.lower() not in HEADER_PARAM_DENYLIST],
                "header",
            )
        )
        parameters.extend(_cookie_params(request.headers))
        return BoundParameters(parameters, _body_content_type(request))


def _path_params(variables: list[KeyValue]) -> list[ParameterObject]:
    return [
        ParameterObject(
            name=v.key,
            location="path",
            required=True,
            description=v.description,
            param_schema={"type": "string", "default": v.value},
        )
        for v in variables
        if not v.disabled
    ]


def _simple_params(entries: list[KeyValue], location: str) -> list[ParameterObject]:
    params = []
    for entry in entries:
        if entry.disabled:
            continue
        schema = {"type": "string"}
        if entry.value is not None:
            schema["default"] = entry.value
        params.append(
            ParameterObject(
                name=entry.key,
                location=location,
                description=entry.description,
                param_schema=schema,
            )
        )
    return params


def _cookie_params(headers: list[KeyValue]) -> list[ParameterObject]:
    cookies = []
    for header in headers:
        if header.disabled or header.key.lower() != "cookie" or not header.value:
            continue
        for pair in header.value.split(";"):
            name, sep, value = pair.strip().partition("=")
            if not name:
                continue
            cookies.append(KeyValue(key=name, value=value if sep else None))
    return _simple_params(cookies, "cookie")


def _body_content_type(request: CapturedRequest) -> str:
    if request.body_content_type:
        return request.body_content_type
    for header in request.headers:
        if not header.disabled and header.key.lower() == "content-type" and header.value:
            return header.value.split(";")[0].strip()
    if isinstance(request.body, (dict, list)):
        return DEFAULT_JSON_CONTENT_TYPE
    return DEFAULT_TEXT_CONTENT_TYPE
