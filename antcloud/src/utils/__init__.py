"""Utilities for form parameter encoding, canonical JSON and signing."""

from .form_params import build_form_params, deserialize
from .canonical_json import dumps_canonical, extract_resp_str_to_sign, is_success_resp
from .signing import render_value, standard_url_encode, string_to_sign, sign, verify_sign

__all__ = [
    "build_form_params",
    "deserialize",
    "dumps_canonical",
    "extract_resp_str_to_sign",
    "is_success_resp",
    "render_value",
    "standard_url_encode",
    "string_to_sign",
    "sign",
    "verify_sign",
]
