"""
Error types raised by the gateway SDK.

ClientError covers failures seen by a calling client (transport, bad
response signature). ProviderError covers failures seen by a service
behind the gateway (invalid or badly signed request parameters); the
service turns it into an error response with build_error_response_str.
"""


class ErrorCodes:
    """Machine-readable error codes."""

    SDK_TRANSPORT_ERROR = "SDK_TRANSPORT_ERROR"
    SDK_BAD_SIGNATURE = "SDK_BAD_SIGNATURE"

    PROVIDER_INVALID_PARAMETER = "PROVIDER_INVALID_PARAMETER"
    PROVIDER_BAD_SIGNATURE = "PROVIDER_BAD_SIGNATURE"


class GatewayError(Exception):
    """Base exception carrying an error code and message."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ClientError(GatewayError):
    """Raised on the client side of a gateway call"""
    pass


class ProviderError(GatewayError):
    """Raised when an inbound gateway request is rejected"""
    pass
