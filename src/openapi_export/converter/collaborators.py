"""Interfaces between the document aggregator and its per-request collaborators.

The aggregator only needs three things from a captured request: its
parameters (plus the body content type), its authentication as a
scheme/requirement/example tuple, and its responses map. Each is supplied by
an object implementing one of the protocols below.
"""

from typing import NamedTuple, Protocol

from pydantic import BaseModel, ConfigDict, Field

from openapi_export.capture.base import CapturedRequest


class ParameterObject(BaseModel):
    """An OpenAPI parameter (path, query, header, or cookie)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    location: str = Field(alias="in")  # path / query / header / cookie
    required: bool = False
    description: str = ""
    param_schema: dict = Field(default_factory=dict, alias="schema")

    @property
    def has_default(self) -> bool:
        """True when the schema declares a default, even a null one."""
        return "default" in self.param_schema

    @property
    def default(self):
        return self.param_schema.get("default")

    def to_openapi(self) -> dict:
        data = self.model_dump(by_alias=True)
        if not data["description"]:
            del data["description"]
        return data


class BoundParameters(NamedTuple):
    parameters: list[ParameterObject]
    body_content_type: str


class AuthOutput(NamedTuple):
    """(scheme id, security requirement, security scheme, example), each optional."""

    scheme_id: str | None = None
    requirement: dict | None = None
    scheme: dict | None = None
    example: dict | None = None

    @property
    def is_complete(self) -> bool:
        return all(self)


class ParameterBinder(Protocol):
    def bind(self, request: CapturedRequest) -> BoundParameters:
        ...


class AuthReconciler(Protocol):
    def reconcile(self, request: CapturedRequest) -> AuthOutput:
        ...


class ResponseReconciler(Protocol):
    def reconcile(self, request: CapturedRequest) -> dict[str, dict]:
        ...
