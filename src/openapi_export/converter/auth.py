"""Map captured authentication onto OpenAPI security schemes."""

import logging
import re

from openapi_export.capture.base import AuthConfig, CapturedRequest

from .collaborators import AuthOutput

logger = logging.getLogger(__name__)


class RequestAuthReconciler:
    """Produces the (scheme id, requirement, scheme, example) tuple for a request.

    Scheme ids are derived from the auth type (and key name for API keys) so
    requests sharing a credential style share one components entry. The
    example carries the captured credential; when that credential is empty
    the tuple is left without an example and the operation gets no security.
    """

    def reconcile(self, request: CapturedRequest) -> AuthOutput:
        auth = request.auth
        if auth is None or auth.type == "noauth":
            return AuthOutput()

        handler = getattr(self, f"_{auth.type.lower()}", None)
        if handler is None:
            logger.debug("Unsupported auth type %r on request %r", auth.type, request.name)
            return AuthOutput()
        return handler(auth)

    def _bearer(self, auth: AuthConfig) -> AuthOutput:
        return _output(
            "bearerAuth",
            {"type": "http", "scheme": "bearer"},
            auth.values.get("token"),
        )

    def _basic(self, auth: AuthConfig) -> AuthOutput:
        username = auth.values.get("username") or ""
        password = auth.values.get("password") or ""
        credential = {"username": username, "password": password} if username or password else None
        return _output("basicAuth", {"type": "http", "scheme": "basic"}, credential)

    def _apikey(self, auth: AuthConfig) -> AuthOutput:
        name = auth.values.get("key") or "X-API-Key"
        location = auth.values.get("in") or "header"
        scheme_id = "apiKey_" + re.sub(r"[^A-Za-z0-9]+", "_", name).strip("_")
        return _output(
            scheme_id,
            {"type": "apiKey", "in": location, "name": name},
            auth.values.get("value"),
        )


def _output(scheme_id: str, scheme: dict, credential) -> AuthOutput:
    return AuthOutput(
        scheme_id=scheme_id,
        requirement={scheme_id: []},
        scheme=scheme,
        example={"value": credential} if credential else None,
    )
