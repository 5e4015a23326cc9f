from decimal import Decimal

import pytest

import nyayasetu.config as config


def test_parse_cors_allow_origins_from_string() -> None:
    out = config.Settings._parse_cors_allow_origins("http://a.com, http://b.com, ,http://a.com")
    assert out == ["http://a.com", "http://b.com", "http://a.com"]
    assert config.Settings._parse_cors_allow_origins(["x"]) == ["x"]


def test_parse_flag_variants() -> None:
    assert config.Settings._parse_flag("yes") is True
    assert config.Settings._parse_flag("ON") is True
    assert config.Settings._parse_flag("0") is False
    assert config.Settings._parse_flag("") is False
    assert config.Settings._parse_flag(True) is True


def test_parse_debug_variants(monkeypatch) -> None:
    monkeypatch.setattr(config, "_running_tests", lambda: False, raising=True)
    assert config.Settings._parse_debug(None) is False
    assert config.Settings._parse_debug(True) is True
    assert config.Settings._parse_debug(0) is False
    assert config.Settings._parse_debug("false") is False
    assert config.Settings._parse_debug("") is False
    assert config.Settings._parse_debug("maybe") is True


def test_defaults(monkeypatch) -> None:
    for name in ("USE_MONGO", "ENVIRONMENT", "NODE_ENV", "RAZORPAY_KEY_ID", "RAZORPAY_KEY_SECRET"):
        monkeypatch.delenv(name, raising=False)
    s = config.Settings()
    assert s.use_mongo is False
    assert s.connection_fee == Decimal("10.00")
    assert s.gst_rate == Decimal("0.18")
    assert s.connection_validity_days == 30
    assert s.is_production is False


def test_environment_aliases(monkeypatch) -> None:
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.setenv("NODE_ENV", "production")
    assert config.Settings().is_production is True


def test_mongo_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("USE_MONGO", "true")
    monkeypatch.setenv("MONGO_URL", "mongodb://db:27017/x")
    s = config.Settings()
    assert s.use_mongo is True
    assert s.mongodb_uri == "mongodb://db:27017/x"


def test_validate_security_rejects_default_secret_in_production(monkeypatch) -> None:
    monkeypatch.setattr(config, "_running_tests", lambda: False, raising=True)
    monkeypatch.delenv("SECRET_KEY", raising=False)
    monkeypatch.delenv("SESSION_SECRET", raising=False)
    with pytest.raises(ValueError) as exc:
        config.Settings(environment="production", debug=False)
    assert "SECRET_KEY" in str(exc.value)


def test_validate_security_accepts_strong_secret(monkeypatch) -> None:
    monkeypatch.setattr(config, "_running_tests", lambda: False, raising=True)
    monkeypatch.setenv("SECRET_KEY", "x" * 40)
    s = config.Settings(environment="production", debug=False)
    assert s.secret_key == "x" * 40


def test_validate_security_ignores_development(monkeypatch) -> None:
    monkeypatch.setattr(config, "_running_tests", lambda: False, raising=True)
    s = config.Settings(environment="development", debug=False)
    assert s.secret_key
