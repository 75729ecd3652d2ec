from __future__ import annotations

import pytest

from credentials_http.basic import CredentialsHTTPBasic
from credentials_http.config import load_config
from credentials_http.errors import ConfigurationError
from credentials_http.typesafe import UserHTTPBasic


def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("CREDENTIALS_HTTP_REALM", "CREDENTIALS_HTTP_TYPED_REALM", "CREDENTIALS_HTTP_CACHE_SIZE"):
        monkeypatch.delenv(key, raising=False)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    cfg = load_config()
    assert cfg.realm == "Users"
    assert cfg.typed_realm == "User"
    assert cfg.cache_capacity is None
    assert cfg.build_cache().capacity is None


def test_values_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("CREDENTIALS_HTTP_REALM", "Back Office")
    monkeypatch.setenv("CREDENTIALS_HTTP_TYPED_REALM", "Staff")
    monkeypatch.setenv("CREDENTIALS_HTTP_CACHE_SIZE", "256")
    cfg = load_config()
    assert cfg.realm == "Back Office"
    assert cfg.typed_realm == "Staff"
    assert cfg.cache_capacity == 256


@pytest.mark.parametrize("raw", ["0", "-3", "many"])
def test_invalid_cache_size_raises(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("CREDENTIALS_HTTP_CACHE_SIZE", raw)
    with pytest.raises(ConfigurationError):
        load_config()


def test_empty_realm_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("CREDENTIALS_HTTP_REALM", "")
    with pytest.raises(ConfigurationError):
        load_config()


def test_build_strategy_wires_realm_and_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("CREDENTIALS_HTTP_CACHE_SIZE", "8")
    strategy = load_config().build_strategy(lambda userid, password: None)
    assert isinstance(strategy, CredentialsHTTPBasic)
    assert strategy.realm == "Users"
    assert strategy.users_cache is not None
    assert strategy.users_cache.capacity == 8


def test_configure_user_basic(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setattr(UserHTTPBasic, "realm", "User")
    monkeypatch.setattr(UserHTTPBasic, "verify_password", None)
    monkeypatch.setenv("CREDENTIALS_HTTP_TYPED_REALM", "Staff")

    def verify(userid: str, password: str) -> None:
        return None

    load_config().configure_user_basic(verify)

    assert UserHTTPBasic.realm == "Staff"
    assert UserHTTPBasic.verify_password is verify
