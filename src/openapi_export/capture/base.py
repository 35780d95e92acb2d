"""Unified data models for captured API requests.

All capture loaders (Postman, native YAML/JSON) convert their input
into these standard models for the OpenAPI converter.
"""

from typing import Any

from pydantic import BaseModel


class KeyValue(BaseModel):
    """A named value attached to a request (header, query entry, path variable)."""

    key: str
    value: str | None = None
    description: str = ""
    disabled: bool = False


class AuthConfig(BaseModel):
    """Authentication settings captured with a request."""

    type: str  # bearer / basic / apikey / noauth / ...
    values: dict[str, str | None] = {}


class CapturedResponse(BaseModel):
    """A response saved alongside a captured request."""

    status: str | int | None = None
    name: str = ""
    description: str = ""
    body: Any = None
    content_type: str | None = None


class CapturedRequest(BaseModel):
    """A single captured HTTP request."""

    name: str
    description: str | None = None
    method: str  # GET / POST / DELETE / ... (case-sensitive)
    url: str  # base URL, without query string
    headers: list[KeyValue] = []
    query: list[KeyValue] = []
    path_variables: list[KeyValue] = []
    body: Any = None
    body_content_type: str | None = None
    auth: AuthConfig | None = None
    responses: list[CapturedResponse] = []


class CapturedDocument(BaseModel):
    """A named collection of captured requests, in capture order."""

    name: str | None = None
    requests: list[CapturedRequest] = []
