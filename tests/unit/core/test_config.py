"""Тесты для системы конфигурации."""

import pytest

from request_descriptor.core.config import ExecutorConfig, TimeoutConfig

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TimeoutConfig
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def test_timeout_config_defaults():
    """Тест дефолтных значений."""
    config = TimeoutConfig()
    assert config.connect == 5
    assert config.read == 30

def test_timeout_config_as_tuple():
    """Тест метода as_tuple."""
    config = TimeoutConfig(connect=3, read=45)
    assert config.as_tuple() == (3, 45)

def test_timeout_config_validation_negative_connect():
    with pytest.raises(ValueError, match="connect timeout must be positive"):
        TimeoutConfig(connect=-1)

def test_timeout_config_validation_zero_read():
    with pytest.raises(ValueError, match="read timeout must be positive"):
        TimeoutConfig(read=0)

def test_timeout_config_immutable():
    """Тест immutability."""
    config = TimeoutConfig()
    with pytest.raises(Exception):  # frozen dataclass
        config.connect = 10

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ExecutorConfig
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def test_executor_config_defaults():
    config = ExecutorConfig()
    assert config.base_url is None
    assert config.timeout == TimeoutConfig()
    assert dict(config.headers) == {}
    assert config.raise_for_status is True
    assert config.verify_ssl is True

def test_executor_config_rejects_bad_base_url():
    with pytest.raises(ValueError, match="base_url"):
        ExecutorConfig(base_url="ftp://example.com")

def test_executor_config_headers_read_only():
    """Тест что headers нельзя изменить."""
    source = {"User-Agent": "test"}
    config = ExecutorConfig(headers=source)

    with pytest.raises(TypeError):
        config.headers["X-New"] = "1"

    source["X-Late"] = "1"
    assert "X-Late" not in config.headers

def test_executor_config_create():
    config = ExecutorConfig.create(
        base_url="https://api.example.com",
        connect_timeout=2,
        read_timeout=10,
        headers={"Accept": "application/json"},
        raise_for_status=False,
    )
    assert config.base_url == "https://api.example.com"
    assert config.timeout.as_tuple() == (2, 10)
    assert config.headers["Accept"] == "application/json"
    assert config.raise_for_status is False

def test_executor_config_immutable():
    config = ExecutorConfig()
    with pytest.raises(Exception):  # frozen dataclass
        config.base_url = "https://other.example.com"
