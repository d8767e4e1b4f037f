"""Settings tests — defaults, env overrides, validation."""

import pytest
from pydantic import ValidationError

from ruliad.config import Settings


def test_defaults(monkeypatch):
    for name in ("RULIAD_LOG_FORMAT", "RULIAD_CACHE_MAX_SIZE"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.cache_max_size == 100
    assert settings.multiway_max_depth == 2
    assert settings.equivalence_threshold == 0.8
    assert settings.max_clause_length == 10_000
    assert settings.log_format == "json"


def test_env_override(monkeypatch):
    monkeypatch.setenv("RULIAD_CACHE_MAX_SIZE", "7")
    monkeypatch.setenv("RULIAD_LOG_FORMAT", "TEXT")
    settings = Settings(_env_file=None)
    assert settings.cache_max_size == 7
    assert settings.log_format == "text"


@pytest.mark.parametrize("field,value", [
    ("cache_max_size", 0),
    ("multiway_max_depth", 4),
    ("multiway_max_depth", -1),
    ("equivalence_threshold", 1.5),
    ("log_format", "xml"),
])
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: value})


def test_deepest_allowed_multiway_depth():
    assert Settings(_env_file=None, multiway_max_depth=3).multiway_max_depth == 3
