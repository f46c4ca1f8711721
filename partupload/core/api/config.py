"""
Uploader configuration module.

Provides configuration for the chunked upload client and its HTTP session.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import ssl

import aiohttp


DEFAULT_APP_NAME = 'MyApp'
DEFAULT_CONTENT_TYPE = 'application/zip'


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.

    Allows customization of SSL behavior for security requirements.
    """
    verify: bool = True
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self):
        """Create SSL context from configuration (False disables verification)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        if self.cert_file:
            context.load_cert_chain(
                self.cert_file,
                keyfile=self.key_file
            )

        context.check_hostname = self.check_hostname

        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Granular control over different timeout types, in seconds.
    """
    total: float = 300.0  # Total request timeout
    connect: float = 30.0  # Connection timeout
    sock_read: float = 60.0  # Socket read timeout
    sock_connect: float = 30.0  # Socket connect timeout

    def to_aiohttp_timeout(self) -> aiohttp.ClientTimeout:
        """Convert to aiohttp ClientTimeout."""
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class RetryConfig:
    """
    Retry configuration for part transfers.

    ``max_retries`` counts retries, so a part gets ``max_retries + 1``
    attempts. The wait before attempt ``n + 1`` is ``base_delay * n``.
    Every failure is retried unless ``transient_only`` is set, in which
    case client errors (4xx other than 408/429) fail on the first attempt.
    """
    max_retries: int = 4
    base_delay: float = 0.5
    transient_only: bool = False

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay < 0:
            raise ValueError("base_delay must be >= 0")

    @property
    def max_attempts(self) -> int:
        """Total number of attempts allowed."""
        return self.max_retries + 1

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay after the given (1-based) failed attempt."""
        return self.base_delay * attempt


@dataclass
class UploaderConfig:
    """
    Complete uploader configuration.

    Attributes:
        base_url: Endpoint root used by the facade and CLI
        app_name: Bucket name used when ``upload`` gets no app name
        content_type: Content type announced in the start request
        user_agent: User-Agent header sent with every request
        max_concurrent_parts: Parts in flight at once (1 = sequential)
        limit: Connection pool size
    """
    base_url: str = ''
    app_name: str = DEFAULT_APP_NAME
    content_type: str = DEFAULT_CONTENT_TYPE
    user_agent: str = 'partupload/1.0.0'
    max_concurrent_parts: int = 1
    limit: int = 10

    # Sub-configurations
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)

    # Additional headers
    extra_headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.max_concurrent_parts < 1:
            raise ValueError("max_concurrent_parts must be >= 1")

    @classmethod
    def insecure(cls, **kwargs) -> 'UploaderConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
