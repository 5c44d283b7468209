from enum import Enum


class UpstreamErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    CLIENT_ERROR = "client_error"
    NETWORK_ERROR = "network_error"
    INVALID_RESPONSE = "invalid_response"


def kind_for_status(status_code: int) -> UpstreamErrorKind:
    """Maps a non-2xx HTTP status to the matching error kind."""
    if status_code == 404:
        return UpstreamErrorKind.NOT_FOUND
    if status_code == 429:
        return UpstreamErrorKind.RATE_LIMITED
    if 500 <= status_code <= 599:
        return UpstreamErrorKind.SERVER_ERROR
    return UpstreamErrorKind.CLIENT_ERROR


class UpstreamError(Exception):
    """
    A failed call to an external API, normalized at the transport boundary.

    `status_code` is None when no HTTP response was received (network errors)
    or when the response body could not be used (invalid responses).
    """

    def __init__(
        self,
        service: str,
        kind: UpstreamErrorKind,
        detail: str,
        status_code: int | None = None,
    ):
        super().__init__(detail)
        self.service = service
        self.kind = kind
        self.detail = detail
        self.status_code = status_code

    @classmethod
    def from_status(cls, service: str, status_code: int) -> "UpstreamError":
        kind = kind_for_status(status_code)
        detail = f"{service} failed with status {status_code}."
        if kind is UpstreamErrorKind.RATE_LIMITED:
            detail += " Rate limit exceeded."
        return cls(service, kind, detail, status_code=status_code)


class PokemonNotFoundError(Exception):
    def __init__(self, name: str):
        super().__init__(f"Pokemon '{name}' not found.")
        self.name = name
