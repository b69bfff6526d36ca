"""
Client configuration.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class ClientConfig:
    """Connection settings and credentials for AntCloudClient."""
    endpoint: str
    access_key: str
    access_secret: str
    security_token: Optional[str] = None
    timeout: float = 30.0
    check_resp_sign: bool = True
    max_retries: int = 0

    def __post_init__(self):
        if not self.endpoint:
            raise ValueError("endpoint can't be empty")
        if not self.access_key:
            raise ValueError("access_key can't be empty")
        if not self.access_secret:
            raise ValueError("access_secret can't be empty")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_retries < 0:
            raise ValueError(f"max_retries can't be negative, got {self.max_retries}")

        self.endpoint = self.endpoint.rstrip("/")

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        """
        Build a config from ANTCLOUD_* environment variables.

        Keyword arguments whose value is not None take precedence over
        the environment.

        Environment:
            ANTCLOUD_ENDPOINT, ANTCLOUD_ACCESS_KEY, ANTCLOUD_ACCESS_SECRET,
            ANTCLOUD_SECURITY_TOKEN, ANTCLOUD_TIMEOUT
        """
        values = {
            "endpoint": os.getenv("ANTCLOUD_ENDPOINT", ""),
            "access_key": os.getenv("ANTCLOUD_ACCESS_KEY", ""),
            "access_secret": os.getenv("ANTCLOUD_ACCESS_SECRET", ""),
            "security_token": os.getenv("ANTCLOUD_SECURITY_TOKEN") or None,
        }
        timeout = os.getenv("ANTCLOUD_TIMEOUT")
        if timeout:
            try:
                values["timeout"] = float(timeout)
            except ValueError:
                raise ValueError(f"ANTCLOUD_TIMEOUT is not a number: {timeout!r}")

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
