"""
Gateway signing utilities for HMAC-SHA1.

Requests are signed over a canonical query string built from their form
parameters; responses are signed over the literal JSON text of the
"response" field. Both cases go through sign().
"""

import base64
import hashlib
import hmac
from typing import Any, Dict, Union
from urllib.parse import quote


def render_value(value: Any) -> str:
    """
    Render a scalar form value as text for signing and transmission.

    Booleans are lowercase and integral floats drop their fractional
    part, matching how the gateway renders the same values.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def standard_url_encode(value: Any) -> str:
    """
    Percent-encode a value for the string to sign.

    Only A-Z, a-z, 0-9 and "-", "_", ".", "~" are left as is. In
    particular "!", "'", "(", ")" and "*" are escaped.
    """
    return quote(render_value(value), safe="")


def string_to_sign(params: Union[str, Dict[str, Any]]) -> str:
    """
    Build the string to sign.

    A string is used verbatim. A dict is turned into key=value pairs
    sorted by key and joined with "&", keys and values percent-encoded.

    Args:
        params: Form parameters or a literal string

    Returns:
        The canonical string to sign
    """
    if isinstance(params, str):
        return params

    return "&".join(
        f"{standard_url_encode(key)}={standard_url_encode(params[key])}"
        for key in sorted(params)
    )


def sign(params: Union[str, Dict[str, Any]], secret: str) -> str:
    """
    Sign form parameters or a literal string using HMAC-SHA1.

    Args:
        params: Form parameters or a literal string
        secret: Shared access secret

    Returns:
        Base64-encoded HMAC signature
    """
    payload = string_to_sign(params)
    mac = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(mac).decode("utf-8")


def verify_sign(params: Union[str, Dict[str, Any]], secret: str, expected: str) -> bool:
    """
    Check an HMAC-SHA1 signature.

    Returns:
        True if the signature matches, False otherwise
    """
    if not expected or not isinstance(expected, str):
        return False

    computed = sign(params, secret)

    # Constant-time comparison
    return hmac.compare_digest(computed.encode("utf-8"), expected.encode("utf-8"))
