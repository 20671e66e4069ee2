import pytest

from dls_api import config


def test_defaults_are_valid():
    config.validate_config()


def test_unknown_default_category(monkeypatch):
    monkeypatch.setattr(config, "DEFAULT_CATEGORY", "village_green")

    with pytest.raises(RuntimeError):
        config.validate_config()


def test_non_positive_registry_cap(monkeypatch):
    monkeypatch.setattr(config, "MAX_MATCHES", 0)

    with pytest.raises(RuntimeError):
        config.validate_config()
