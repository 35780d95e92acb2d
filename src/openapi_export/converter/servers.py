"""Server list: one entry per host, describing which requests use it."""

DEFAULT_SERVER_LABEL = "Used for: "
DEFAULT_SERVER_SEPARATOR = ", "


class HostUsage:
    """Ordered host -> request names table, filled during conversion."""

    def __init__(self):
        self._hosts: dict[str, list[str]] = {}

    def record(self, host: str, request_name: str) -> None:
        self._hosts.setdefault(host, []).append(request_name)

    def items(self) -> list[tuple[str, list[str]]]:
        return [(host, list(names)) for host, names in self._hosts.items()]

    def __len__(self) -> int:
        return len(self._hosts)


def flatten_servers(
    usage: HostUsage,
    label: str = DEFAULT_SERVER_LABEL,
    separator: str = DEFAULT_SERVER_SEPARATOR,
) -> list[dict]:
    """Build the OpenAPI servers list, hosts in first-seen order."""
    return [
        {"url": host, "description": f"{label}{separator.join(names)}."}
        for host, names in usage.items()
    ]
