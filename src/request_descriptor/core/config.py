"""
Configuration for the request executor.

Все конфиги immutable (frozen dataclasses) для потокобезопасности.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimeoutConfig:
    """
    Timeouts for sending requests.

    Args:
        connect: Connection timeout (seconds)
        read: Read timeout (seconds)

    Examples:
        >>> TimeoutConfig(connect=5, read=30)
    """
    connect: float = 5
    read: float = 30

    def __post_init__(self):
        if self.connect <= 0:
            raise ValueError("connect timeout must be positive")
        if self.read <= 0:
            raise ValueError("read timeout must be positive")

    def as_tuple(self) -> Tuple[float, float]:
        """Вернуть как (connect, read) для requests."""
        return (self.connect, self.read)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# EXECUTOR CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ExecutorConfig:
    """
    Settings of RequestExecutor.

    Args:
        base_url: Prefix for relative descriptor paths
        timeout: Timeouts used by send()
        headers: Default headers, overridden by every descriptor header source
        raise_for_status: Raise HTTPError subclasses for 4xx/5xx responses
        verify_ssl: Verify TLS certificates

    Examples:
        >>> ExecutorConfig(base_url="https://api.example.com")
        >>> ExecutorConfig.create(base_url="https://api.example.com", read_timeout=60)
    """
    base_url: Optional[str] = None
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    headers: Mapping[str, str] = field(default_factory=dict)
    raise_for_status: bool = True
    verify_ssl: bool = True

    def __post_init__(self):
        if self.base_url is not None and not self.base_url.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")

        # frozen dataclass: обходим через object.__setattr__
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def create(
        cls,
        base_url: Optional[str] = None,
        connect_timeout: float = 5,
        read_timeout: float = 30,
        headers: Optional[Mapping[str, str]] = None,
        raise_for_status: bool = True,
        verify_ssl: bool = True,
    ) -> "ExecutorConfig":
        """Build a config from flat keyword arguments."""
        return cls(
            base_url=base_url,
            timeout=TimeoutConfig(connect=connect_timeout, read=read_timeout),
            headers=headers or {},
            raise_for_status=raise_for_status,
            verify_ssl=verify_ssl,
        )
