"""
Provider-side helpers for services that sit behind the gateway.

A provider receives the gateway's form parameters, checks their
signature, deserializes them, and answers with a signed success
response or an unsigned error response.
"""

import copy
import logging
from typing import Any, Dict, Optional, Tuple

from .errors import ErrorCodes, ProviderError
from .utils.canonical_json import dumps_canonical
from .utils.form_params import deserialize
from .utils.signing import sign, verify_sign

logger = logging.getLogger(__name__)


def validate_request_sign(
    gw_request_params: Optional[Dict[str, Any]],
    access_secret: str
) -> Tuple[str, Dict[str, Any]]:
    """
    Check the signature of inbound gateway request parameters.

    Args:
        gw_request_params: Form parameters as received from the gateway
        access_secret: Shared access secret

    Returns:
        Tuple of (sign, parameters without sign)

    Raises:
        ProviderError: PROVIDER_INVALID_PARAMETER if sign_type or sign is
            missing, PROVIDER_BAD_SIGNATURE if the signature does not match
    """
    if (gw_request_params is None
            or "sign_type" not in gw_request_params
            or "sign" not in gw_request_params):
        raise ProviderError(ErrorCodes.PROVIDER_INVALID_PARAMETER, "Gateway request params is invalid")

    signature = gw_request_params["sign"]
    params_without_sign = {k: v for k, v in gw_request_params.items() if k != "sign"}

    if not verify_sign(params_without_sign, access_secret, signature):
        logger.warning(f"Signature mismatch for gateway request {params_without_sign.get('req_msg_id')}")
        raise ProviderError(
            ErrorCodes.PROVIDER_BAD_SIGNATURE,
            "The signature of gateway request params is invalid"
        )

    return signature, params_without_sign


def validate_request_sign_and_deserialize(
    gw_request_params: Optional[Dict[str, Any]],
    access_secret: str
) -> Dict[str, Any]:
    """
    Check the signature of inbound parameters and rebuild the nested request.

    Raises:
        ProviderError: If the parameters are missing, badly signed, or
            cannot be deserialized
    """
    _, params_without_sign = validate_request_sign(gw_request_params, access_secret)

    try:
        return deserialize(params_without_sign)
    except ValueError as e:
        raise ProviderError(ErrorCodes.PROVIDER_INVALID_PARAMETER, str(e)) from e


def build_success_response_str(resp_data: Dict[str, Any], req_msg_id: str, access_secret: str) -> str:
    """
    Build a signed success response body.

    The payload gets req_msg_id, result_code "OK" and result_msg
    "Success"; the signature covers its compact JSON text exactly as it
    appears in the body.

    Args:
        resp_data: Business payload (left unmodified)
        req_msg_id: Message id of the request being answered
        access_secret: Shared access secret

    Returns:
        JSON text {"response": ..., "sign": ...}
    """
    response = copy.deepcopy(resp_data)
    response["req_msg_id"] = req_msg_id
    response["result_code"] = "OK"
    response["result_msg"] = "Success"

    signature = sign(dumps_canonical(response), access_secret)
    return dumps_canonical({"response": response, "sign": signature})


def build_error_response_str(req_msg_id: str, error_code: str, error_msg: str) -> str:
    """Build an unsigned error response body."""
    return dumps_canonical({
        "response": {
            "req_msg_id": req_msg_id,
            "result_code": error_code,
            "result_msg": error_msg,
        }
    })
