import typing as t
from copy import deepcopy

from django.http import HttpRequest

SENSITIVE_KEYS = {"password", "token", "x-api-key", "authorization", "authentication", "cookie"}


def get_client_ip(request: HttpRequest) -> str | None:
    """Extract the client IP address from a request.

    Checks X-Forwarded-For first (for proxied requests), then falls back to REMOTE_ADDR.
    """
    x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if x_forwarded_for:
        # X-Forwarded-For can contain multiple IPs, take the first
        return str(x_forwarded_for.split(",")[0].strip())
    remote_addr = request.META.get("REMOTE_ADDR")
    return str(remote_addr) if remote_addr else None


def get_user_agent(request: HttpRequest) -> str:
    return str(request.META.get("HTTP_USER_AGENT", ""))[:512]


def obfuscate(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Obfuscate sensitive data in payloads and headers."""
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data
