"""
HTTP client for calling services through the gateway.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import ClientConfig
from .errors import ClientError, ErrorCodes
from .utils.canonical_json import extract_resp_str_to_sign, is_success_resp
from .utils.form_params import build_form_params
from .utils.signing import render_value, sign, verify_sign

logger = logging.getLogger(__name__)

SDK_VERSION = "PYTHON-SDK-1.0.0"
DEFAULT_SIGN_TYPE = "HmacSHA1"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class RequestsTransport:
    """Default transport sending form parameters with a requests Session."""

    def __init__(self, max_retries: int = 0, retry_backoff_factor: float = 1.0):
        """
        Initialize transport.

        Args:
            max_retries: Retry attempts for connection errors and 429/5xx
                responses (0 disables retries)
            retry_backoff_factor: Backoff factor for retries
        """
        self.session = requests.Session()

        if max_retries > 0:
            retry_strategy = Retry(
                total=max_retries,
                backoff_factor=retry_backoff_factor,
                status_forcelist=[429, 500, 502, 503, 504],
                allowed_methods=["POST", "GET"]
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

        self.session.headers.update({"User-Agent": f"antcloud-python-sdk/{SDK_VERSION}"})

    def send(
        self,
        url: str,
        method: str,
        content_type: str,
        data: Dict[str, str],
        timeout: float
    ) -> bytes:
        """
        Send form parameters and return the raw response body.

        GET requests carry the parameters as a query string, anything
        else as a form body.

        Raises:
            requests.RequestException: On connection failures and timeouts
        """
        if method.upper() == "GET":
            response = self.session.get(url, params=data, timeout=timeout)
        else:
            response = self.session.request(
                method.upper(),
                url,
                data=data,
                headers={"Content-Type": content_type},
                timeout=timeout
            )

        logger.debug(f"{method.upper()} {url} -> {response.status_code} ({len(response.content)} bytes)")
        return response.content

    def close(self):
        """Close the HTTP session."""
        self.session.close()


class AntCloudClient:
    """
    Client for invoking gateway methods.

    Usage:
        client = AntCloudClient(ClientConfig.from_env())
        resp = client.execute({"method": "antcloud.demo.echo", "version": "1.0", "input": "hi"})
    """

    def __init__(self, config: ClientConfig, transport=None):
        """
        Initialize client.

        Args:
            config: Endpoint and credentials
            transport: Object with send(url, method, content_type, data,
                timeout) -> bytes; a RequestsTransport is created if omitted
        """
        self.config = config
        self.transport = transport or RequestsTransport(max_retries=config.max_retries)

    @classmethod
    def from_params(
        cls,
        endpoint: str,
        access_key: str,
        access_secret: str,
        transport=None,
        **kwargs
    ) -> "AntCloudClient":
        """Create a client without building a ClientConfig first."""
        config = ClientConfig(endpoint=endpoint, access_key=access_key, access_secret=access_secret, **kwargs)
        return cls(config, transport=transport)

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    @property
    def access_key(self) -> str:
        return self.config.access_key

    @property
    def access_secret(self) -> str:
        return self.config.access_secret

    def build_request_params(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """
        Flatten a request and add the signed protocol fields.

        Args:
            request: Nested request; must contain "method" and "version"

        Returns:
            Form parameters including "sign"
        """
        if not request.get("method"):
            raise ValueError("method can't be empty")
        if not request.get("version"):
            raise ValueError("version can't be empty")

        content = build_form_params(request)
        content.update({
            "req_msg_id": uuid.uuid4().hex,
            "req_time": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "sdk_version": SDK_VERSION,
            "access_key": self.access_key,
            "sign_type": DEFAULT_SIGN_TYPE,
        })
        if self.config.security_token:
            content["security_token"] = self.config.security_token

        # Nothing in content may change after this point
        content["sign"] = sign(content, self.access_secret)
        return content

    def execute(
        self,
        request: Dict[str, Any],
        check_resp_sign: Optional[bool] = None,
        raw_body: bool = False,
        http_method: str = "POST"
    ) -> Union[Dict[str, Any], str]:
        """
        Invoke a gateway method.

        Args:
            request: Nested request; must contain "method" and "version"
            check_resp_sign: Verify the response signature (defaults to
                the configured value)
            raw_body: Return the body text without parsing or verifying it
            http_method: HTTP method

        Returns:
            The "response" payload, or the body text if raw_body is set

        Raises:
            ClientError: SDK_TRANSPORT_ERROR on connection failures and
                malformed responses, SDK_BAD_SIGNATURE if the response
                signature is missing or wrong
        """
        content = self.build_request_params(request)
        if check_resp_sign is None:
            check_resp_sign = self.config.check_resp_sign

        logger.debug(f"Calling {request['method']} (req_msg_id={content['req_msg_id']})")

        try:
            body = self.transport.send(
                self.endpoint,
                http_method,
                FORM_CONTENT_TYPE,
                {key: render_value(value) for key, value in content.items()},
                self.config.timeout
            )
        except (requests.RequestException, OSError) as e:
            logger.error(f"Transport failure for {content['req_msg_id']}: {e}")
            raise ClientError(ErrorCodes.SDK_TRANSPORT_ERROR, f"Server connect error, msg: {e}") from e

        if isinstance(body, bytes):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError as e:
                logger.error(f"Undecodable response to {content['req_msg_id']}: {e}")
                raise ClientError(ErrorCodes.SDK_TRANSPORT_ERROR, f"Unexpected gateway response encoding: {e}") from e

        if raw_body:
            return body

        return self.parse_response(body, check_resp_sign)

    def parse_response(self, body: str, check_resp_sign: bool = True) -> Dict[str, Any]:
        """
        Decode a gateway response body and verify its signature.

        The signature is only checked on successful responses; error
        responses are not signed by the gateway.

        Raises:
            ClientError: If the body is malformed or the signature is bad
        """
        try:
            body_decoded = json.loads(body)
        except ValueError as e:
            raise ClientError(ErrorCodes.SDK_TRANSPORT_ERROR, f"Unexpected gateway response: {body}") from e

        if not isinstance(body_decoded, dict) or not isinstance(body_decoded.get("response"), dict):
            raise ClientError(ErrorCodes.SDK_TRANSPORT_ERROR, f"Unexpected gateway response: {body}")

        resp_content = body_decoded["response"]
        if is_success_resp(resp_content) and check_resp_sign:
            signature = body_decoded.get("sign")
            if not signature:
                logger.warning(f"Empty signature in response to {resp_content.get('req_msg_id')}")
                raise ClientError(ErrorCodes.SDK_BAD_SIGNATURE, "Empty signature in response")

            str_to_sign = extract_resp_str_to_sign(body)
            if str_to_sign is None or not verify_sign(str_to_sign, self.access_secret, signature):
                logger.warning(f"Invalid signature in response to {resp_content.get('req_msg_id')}")
                raise ClientError(ErrorCodes.SDK_BAD_SIGNATURE, "Invalid signature in response")

        return resp_content

    def close(self):
        """Release the transport."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
