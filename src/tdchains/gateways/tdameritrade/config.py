"""
TD Ameritrade Gateway Configuration.

Handles API credentials and transport settings.

Authenticated requests carry an OAuth bearer token and receive real-time
quotes. Without a token, requests are signed with the application's client id
(``apikey=<CLIENT_ID>@AMER.OAUTHAP``) and receive delayed quotes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


DEFAULT_BASE_URL = "https://api.tdameritrade.com/v1/"
CLIENT_ID_SUFFIX = "@AMER.OAUTHAP"


@dataclass(frozen=True)
class TDAmeritradeCredentials:
    """
    TD Ameritrade API credentials.

    Can be loaded from environment variables or passed directly.

    Environment Variables:
        TDA_ACCESS_TOKEN: OAuth access token (optional)
        TDA_CLIENT_ID: Application consumer key (optional)

    At least one of the two must be set.

    Example:
        # From environment
        creds = TDAmeritradeCredentials.from_env()

        # Direct
        creds = TDAmeritradeCredentials(client_id="MYAPPKEY")
    """

    access_token: str | None = None
    client_id: str | None = None

    def __post_init__(self) -> None:
        if not self.access_token and not self.client_id:
            raise ValueError(
                "TD Ameritrade credentials need an access token or a client id. "
                "Register an application at https://developer.tdameritrade.com"
            )

    @classmethod
    def from_env(cls) -> TDAmeritradeCredentials:
        """Load credentials from environment variables."""
        return cls(
            access_token=os.environ.get("TDA_ACCESS_TOKEN") or None,
            client_id=os.environ.get("TDA_CLIENT_ID") or None,
        )

    @property
    def api_key(self) -> str | None:
        """Client id in the form the ``apikey`` query parameter expects."""
        if not self.client_id:
            return None
        if self.client_id.endswith(CLIENT_ID_SUFFIX):
            return self.client_id
        return f"{self.client_id}{CLIENT_ID_SUFFIX}"

    @property
    def is_authenticated(self) -> bool:
        """True when requests carry a bearer token."""
        return bool(self.access_token)


@dataclass
class TDAmeritradeConfig:
    """
    TD Ameritrade Gateway configuration.

    Attributes:
        credentials: API credentials (required)
        base_url: API root, must end with a slash
        timeout: Per-request timeout in seconds
        user_agent: User-Agent header sent with every request

    Example:
        config = TDAmeritradeConfig(
            credentials=TDAmeritradeCredentials.from_env(),
            timeout=10.0,
        )
    """

    credentials: TDAmeritradeCredentials
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    user_agent: str = "tdchains/0.1"
    extra_headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"Invalid base_url: {self.base_url}. Must be an http(s) URL")
        if not self.base_url.endswith("/"):
            self.base_url = f"{self.base_url}/"
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_env(cls) -> TDAmeritradeConfig:
        """
        Create config from environment variables.

        Reads TDA_ACCESS_TOKEN, TDA_CLIENT_ID, TDA_BASE_URL and TDA_TIMEOUT.

        Returns:
            TDAmeritradeConfig instance
        """
        return cls(
            credentials=TDAmeritradeCredentials.from_env(),
            base_url=os.environ.get("TDA_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(os.environ.get("TDA_TIMEOUT", "30.0")),
        )
