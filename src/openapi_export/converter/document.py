"""Document aggregator: merges captured requests into one OpenAPI document.

Requests are processed once, in input order. For every request the
collaborators supply parameters, auth and responses; the request's URL is
turned into a path template, and the resulting operation is merged into
the path item for that template. The first request to claim a
(path template, method) pair keeps it.
"""

import copy
import logging
import time

from openapi_export.capture.base import CapturedDocument, CapturedRequest
from openapi_export.errors import ConverterStateError, UnparseableUrlError

from .auth import RequestAuthReconciler
from .collaborators import AuthOutput, AuthReconciler, ParameterBinder, ParameterObject, ResponseReconciler
from .parameters import RequestParameterBinder
from .paths import PathItem
from .responses import RequestResponseReconciler
from .servers import DEFAULT_SERVER_LABEL, DEFAULT_SERVER_SEPARATOR, HostUsage, flatten_servers
from .url import PathTemplate

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.3"
DEFAULT_TITLE = "OpenAPI export"


class DocumentAggregator:
    """Builds an OpenAPI 3.0 document from captured requests."""

    def __init__(
        self,
        parameter_binder: ParameterBinder | None = None,
        auth_reconciler: AuthReconciler | None = None,
        response_reconciler: ResponseReconciler | None = None,
        title: str | None = None,
        version: str | None = None,
        server_label: str = DEFAULT_SERVER_LABEL,
        server_separator: str = DEFAULT_SERVER_SEPARATOR,
    ):
        self.parameter_binder = parameter_binder or RequestParameterBinder()
        self.auth_reconciler = auth_reconciler or RequestAuthReconciler()
        self.response_reconciler = response_reconciler or RequestResponseReconciler()
        self.title = title
        self.version = version
        self.server_label = server_label
        self.server_separator = server_separator

        self.info: dict = {}
        self.paths: dict[str, PathItem] = {}
        self.security_schemes: dict[str, dict] = {}
        # Mirrors security_schemes by id; read back on re-import into the capture tool.
        self.examples: dict[str, dict] = {}
        self.hosts = HostUsage()
        self.skipped: list[CapturedRequest] = []
        self._converted = False

    def convert(self, meta: CapturedDocument, requests: list[CapturedRequest]) -> None:
        """Process all ``requests`` in order."""
        self.info = {
            "title": self.title or meta.name or DEFAULT_TITLE,
            "version": self.version or str(int(time.time() * 1000)),
        }
        for request in requests:
            self._convert_request(request)
        self._converted = True

    def generate_output(self) -> dict:
        """Return the OpenAPI document. Only valid after convert()."""
        if not self._converted:
            raise ConverterStateError("generate_output() called before convert()")
        return {
            "openapi": OPENAPI_VERSION,
            "info": dict(self.info),
            "servers": flatten_servers(self.hosts, self.server_label, self.server_separator),
            "paths": {template: copy.deepcopy(item.to_openapi()) for template, item in self.paths.items()},
            "components": {
                "securitySchemes": copy.deepcopy(self.security_schemes),
                "examples": copy.deepcopy(self.examples),
            },
        }

    def _convert_request(self, request: CapturedRequest) -> None:
        bound = self.parameter_binder.bind(request)
        try:
            url = PathTemplate.parse(request.url, bound.parameters)
        except UnparseableUrlError as e:
            logger.warning("Skipping request %r: %s", request.name, e)
            self.skipped.append(request)
            return

        body = self._generate_body(request, bound.body_content_type)
        auth = self.auth_reconciler.reconcile(request)
        responses = self.response_reconciler.reconcile(request)

        operation = self._generate_operation(request, bound.parameters, body, auth, responses)
        self._add_operation(url.pathname, request, operation)
        self.hosts.record(url.origin, request.name)

    def _generate_body(self, request: CapturedRequest, content_type: str) -> dict | None:
        if request.body is None or request.body == "":
            return None
        return {"content": {content_type: {"example": {"value": request.body}}}}

    def _generate_operation(
        self,
        request: CapturedRequest,
        parameters: list[ParameterObject],
        body: dict | None,
        auth: AuthOutput,
        responses: dict[str, dict],
    ) -> dict:
        operation = {
            "operationId": request.url.rsplit("/", 1)[-1] or request.name,
            "summary": request.name,
            "description": request.description or request.name,
            "responses": responses,
        }
        if parameters:
            operation["parameters"] = [p.to_openapi() for p in parameters]
        if body:
            operation["requestBody"] = body

        if auth.is_complete:
            # Same id from a later request overwrites the scheme.
            self.security_schemes[auth.scheme_id] = auth.scheme
            self.examples[auth.scheme_id] = auth.scheme
            operation["security"] = [auth.requirement]

        return operation

    def _add_operation(self, template: str, request: CapturedRequest, operation: dict) -> None:
        item = self.paths.get(template, PathItem())
        item, inserted = item.with_operation(request.method, operation)
        if not inserted:
            if request.method in item.operations:
                logger.debug("%s %s already taken; dropping %r", request.method, template, request.name)
            else:
                logger.debug("Unsupported method %r on request %r", request.method, request.name)
            return
        self.paths[template] = item
