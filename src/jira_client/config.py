"""
Configuration models and validation for jira-client.
"""
import json
import logging
from dataclasses import dataclass
from typing import Annotated, Any, Dict, Literal, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field, SecretStr, field_validator

from .core.parser_pool import ParserPool
from .env import resolve, resolve_bool, resolve_float
from .types import Serializer

logger = logging.getLogger(__name__)

# Constants
DEFAULT_TIMEOUT_CONNECT = 5.0
DEFAULT_TIMEOUT_READ = 30.0
DEFAULT_TIMEOUT_WRITE = 10.0
DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_ENV_PREFIX = "JIRA_"

class TimeoutConfig(BaseModel):
    """Timeout configuration."""
    connect: float = DEFAULT_TIMEOUT_CONNECT
    read: float = DEFAULT_TIMEOUT_READ
    write: float = DEFAULT_TIMEOUT_WRITE
    pool: Optional[float] = None

class BasicCredentials(BaseModel):
    """HTTP Basic credentials sent with every request."""
    model_config = {"frozen": True}

    type: Literal["basic"] = "basic"
    username: str
    password: SecretStr

class SessionCredentials(BaseModel):
    """Credentials exchanged once for session cookies at ``auth_url``."""
    model_config = {"frozen": True}

    type: Literal["session"] = "session"
    username: str
    password: SecretStr
    auth_url: str

class SignedTokenCredentials(BaseModel):
    """Shared secret and issuer used to sign per-request JWTs."""
    model_config = {"frozen": True}

    type: Literal["jwt"] = "jwt"
    secret: SecretStr
    issuer: str

Credentials = Annotated[
    Union[BasicCredentials, SessionCredentials, SignedTokenCredentials],
    Field(discriminator="type"),
]

class DefaultSerializer:
    """Default JSON serializer backed by a decoder pool."""

    def __init__(self, parser_pool: Optional[ParserPool] = None):
        self.parser_pool = parser_pool or ParserPool()

    def serialize(self, data: Any) -> bytes:
        return json.dumps(data, allow_nan=False).encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        return self.parser_pool.parse(data)

class ClientConfig(BaseModel):
    """Client configuration."""
    model_config = {"arbitrary_types_allowed": True}

    base_url: str
    auth: Optional[Credentials] = None
    timeout: Optional[Union[float, TimeoutConfig]] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    content_type: str = DEFAULT_CONTENT_TYPE
    follow_redirects: bool = True

    # Optional pre-configured client (httpx.Client or httpx.AsyncClient)
    httpx_client: Any = None

    # Innermost transport; auth transports wrap it
    transport: Any = None

    # Custom serializer
    serializer: Optional[Serializer] = None

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("base_url is required")
        # relative paths are joined below the base path
        if not v.endswith("/"):
            v += "/"
        return v

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_ENV_PREFIX,
        env_file: Optional[str] = None,
        **overrides: Any,
    ) -> "ClientConfig":
        """
        Build a config from ``<prefix>*`` environment variables.

        Keyword overrides win over the environment. Recognised variables:
        BASE_URL, AUTH_TYPE (basic|session|jwt), USERNAME, PASSWORD, AUTH_URL,
        JWT_SECRET, JWT_ISSUER, TIMEOUT, FOLLOW_REDIRECTS.
        """
        if env_file:
            load_dotenv(env_file)

        def env(name: str, default: Any = None) -> Any:
            return resolve(overrides.pop(name.lower(), None), f"{prefix}{name}", default)

        base_url = env("BASE_URL")
        if not base_url:
            raise ValueError(f"{prefix}BASE_URL is not set")

        auth_type = env("AUTH_TYPE")
        username = env("USERNAME")
        password = env("PASSWORD")
        auth_url = env("AUTH_URL")
        jwt_secret = env("JWT_SECRET")
        jwt_issuer = env("JWT_ISSUER")
        timeout = overrides.pop("timeout", None)
        if not isinstance(timeout, TimeoutConfig):
            timeout = resolve_float(timeout, f"{prefix}TIMEOUT")
        follow_redirects = resolve_bool(overrides.pop("follow_redirects", None), f"{prefix}FOLLOW_REDIRECTS", True)

        auth: Optional[Credentials] = None
        if auth_type == "basic":
            auth = BasicCredentials(username=username, password=password)
        elif auth_type == "session":
            auth = SessionCredentials(username=username, password=password, auth_url=auth_url)
        elif auth_type == "jwt":
            auth = SignedTokenCredentials(secret=jwt_secret, issuer=jwt_issuer)
        elif auth_type:
            logger.warning(f"Unknown {prefix}AUTH_TYPE '{auth_type}', no transport auth configured")

        return cls(
            base_url=base_url,
            auth=auth,
            timeout=timeout,
            follow_redirects=follow_redirects,
            **overrides,
        )

def normalize_timeout(timeout: Optional[Union[float, TimeoutConfig]]) -> TimeoutConfig:
    """Normalize timeout to TimeoutConfig object."""
    if timeout is None:
        return TimeoutConfig()
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=float(timeout), read=float(timeout), write=float(timeout))
    return timeout

@dataclass
class ResolvedConfig:
    """Fully resolved configuration ready for usage."""
    base_url: str
    auth: Optional[Credentials]
    timeout: TimeoutConfig
    headers: Dict[str, str]
    content_type: str
    follow_redirects: bool
    serializer: Serializer

def resolve_config(config: ClientConfig) -> ResolvedConfig:
    """Apply defaults and return resolved config."""
    return ResolvedConfig(
        base_url=config.base_url,
        auth=config.auth,
        timeout=normalize_timeout(config.timeout),
        headers=config.headers,
        content_type=config.content_type,
        follow_redirects=config.follow_redirects,
        serializer=config.serializer or DefaultSerializer()
    )
