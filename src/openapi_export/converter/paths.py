"""Path items: the operations registered against one path template."""

from pydantic import BaseModel, ConfigDict

HTTP_METHODS = ("GET", "POST", "DELETE", "OPTIONS", "HEAD", "PATCH", "TRACE")


class PathItem(BaseModel):
    """Immutable set of operations keyed by HTTP method (upper-case)."""

    model_config = ConfigDict(frozen=True)

    operations: dict[str, dict] = {}

    def with_operation(self, method: str, operation: dict) -> tuple["PathItem", bool]:
        """Return a path item holding ``operation`` under ``method``.

        The first operation for a method is kept: when the slot is taken,
        or the method is not one of HTTP_METHODS, ``self`` is returned
        unchanged together with False.
        """
        if method not in HTTP_METHODS or method in self.operations:
            return self, False
        return PathItem(operations={**self.operations, method: operation}), True

    def to_openapi(self) -> dict:
        return {method.lower(): op for method, op in self.operations.items()}
