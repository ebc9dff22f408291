"""Exception classes for the inscription export."""


class InscriptionExportError(Exception):
    """Base exception for the inscription export."""
    pass


class AuthError(InscriptionExportError):
    """The explorer rejected the API key."""
    pass


class NetworkError(InscriptionExportError):
    """Transport and API-related errors."""
    pass


class RateLimitError(NetworkError):
    """The explorer throttled the request. Safe to retry after a delay."""
    pass


class OKLinkAPIError(NetworkError):
    """OKLink answered with an error code we have no specific handling for."""

    def __init__(self, code: str, message: str):
        super().__init__(f"OKLink API error {code}: {message}")
        self.code = code
        self.message = message


class ResponseFormatError(InscriptionExportError):
    """The explorer response did not have the expected shape."""
    pass


class UnsupportedTransactionType(InscriptionExportError):
    """A transaction matched none of the classification rules."""

    def __init__(self, tx_id: str, reason: str):
        super().__init__(f"Unsupported transaction {tx_id}: {reason}")
        self.tx_id = tx_id
        self.reason = reason


class CsvWriteError(InscriptionExportError, OSError):
    """Writing the output CSV failed."""
    pass
