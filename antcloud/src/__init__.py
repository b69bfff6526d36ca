"""AntCloud gateway SDK - request signing, response verification and form codec"""

from .client import AntCloudClient, RequestsTransport, SDK_VERSION, DEFAULT_SIGN_TYPE
from .config import ClientConfig
from .errors import ErrorCodes, GatewayError, ClientError, ProviderError
from .provider import (
    validate_request_sign,
    validate_request_sign_and_deserialize,
    build_success_response_str,
    build_error_response_str,
)
from .utils import build_form_params, deserialize, sign, extract_resp_str_to_sign

__version__ = "1.0.0"

__all__ = [
    "AntCloudClient",
    "RequestsTransport",
    "SDK_VERSION",
    "DEFAULT_SIGN_TYPE",
    "ClientConfig",
    "ErrorCodes",
    "GatewayError",
    "ClientError",
    "ProviderError",
    "validate_request_sign",
    "validate_request_sign_and_deserialize",
    "build_success_response_str",
    "build_error_response_str",
    "build_form_params",
    "deserialize",
    "sign",
    "extract_resp_str_to_sign",
]
