"""Build the OpenAPI responses map from saved responses."""

from openapi_export.capture.base import CapturedRequest

DEFAULT_RESPONSES = {"default": {"description": "Default response"}}


class RequestResponseReconciler:
    def reconcile(self, request: CapturedRequest) -> dict[str, dict]:
        """Key saved responses by status code; the first one per status wins."""
        responses: dict[str, dict] = {}
        for resp in request.responses:
            status = str(resp.status) if resp.status is not None else "default"
            if status in responses:
                continue

            entry: dict = {"description": resp.description or resp.name or "Response"}
            if resp.body is not None:
                content_type = resp.content_type or (
                    "application/json" if isinstance(resp.body, (dict, list)) else "text/plain"
                )
                entry["content"] = {content_type: {"example": resp.body}}
            responses[status] = entry

        return responses or {k: dict(v) for k, v in DEFAULT_RESPONSES.items()}
