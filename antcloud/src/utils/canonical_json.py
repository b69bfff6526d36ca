"""
Canonical JSON handling for gateway responses.

A gateway response body has the shape {"response": ..., "sign": ...} and
the signature covers the "response" value exactly as the server wrote
it. This module recovers that text from the raw body.
"""

import json
from typing import Any, Dict, Optional, Union


RESPONSE_NODE_KEY = '"response"'
SIGN_NODE_KEY = '"sign"'


def dumps_canonical(obj: Any) -> str:
    """
    Serialize to compact JSON.

    Keys keep insertion order, separators carry no whitespace and
    non-ASCII characters are written literally. This is the form the
    gateway itself produces.
    """
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def is_success_resp(resp_content: Dict[str, Any]) -> bool:
    """Check whether a response payload reports success."""
    return resp_content.get("result_code") == "OK"


def extract_resp_str_to_sign(resp_body: Union[str, bytes]) -> Optional[str]:
    """
    Extract the text of the "response" value from a raw response body.

    If re-serializing the parsed value reproduces a substring of the
    body, that substring is returned. Otherwise the object is cut out of
    the body by position, which keeps any whitespace the server put
    inside it.

    The cut assumes "response" holds a JSON object and that no "}" after
    it belongs to a string value. Braces inside string values at the
    boundary can move the cut.

    Args:
        resp_body: Raw response body

    Returns:
        The exact response text, or None if the body lacks a
        "response" or "sign" field

    Raises:
        ValueError: If the body is not valid JSON
    """
    if isinstance(resp_body, bytes):
        resp_body = resp_body.decode("utf-8")

    decoded = json.loads(resp_body)
    if not isinstance(decoded, dict):
        return None

    if "response" not in decoded:
        return None

    candidate = dumps_canonical(decoded["response"])
    if candidate in resp_body:
        return candidate

    resp_first_idx = resp_body.find(RESPONSE_NODE_KEY)
    sign_first_idx = resp_body.find(SIGN_NODE_KEY)
    if resp_first_idx == -1 or sign_first_idx == -1:
        return None

    start_idx = resp_body.find("{", resp_first_idx)
    if start_idx == -1:
        return None

    if resp_first_idx < sign_first_idx:
        # response comes first: its object closes right before the last "sign"
        sign_last_idx = resp_body.rfind(SIGN_NODE_KEY)
        end_idx = resp_body.rfind("}", 0, sign_last_idx)
    else:
        # response comes last: its object closes right before the envelope does
        envelope_end_idx = resp_body.rfind("}")
        end_idx = resp_body.rfind("}", 0, envelope_end_idx)

    if end_idx < start_idx:
        return None

    return resp_body[start_idx:end_idx + 1]
