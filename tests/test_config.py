"""Tests for environment-driven run settings."""

import pytest

from pbtfun.config import DEFAULT_MAX_SHRINKS, DEFAULT_TEST_COUNT, Settings
from pbtfun.result import Err, Ok

VARIABLES = ("PBTFUN_SEED", "PBTFUN_TEST_COUNT", "PBTFUN_MAX_SHRINKS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in VARIABLES:
        monkeypatch.delenv(name, raising=False)
    # Keep any .env in the working directory out of these tests.
    monkeypatch.chdir(tmp_path)


def test_defaults_without_environment() -> None:
    assert Settings.from_env() == Ok(Settings())
    assert Settings().test_count == DEFAULT_TEST_COUNT
    assert Settings().max_shrinks == DEFAULT_MAX_SHRINKS
    assert Settings().seed is None


def test_values_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("PBTFUN_SEED", "7")
    monkeypatch.setenv("PBTFUN_TEST_COUNT", " 25 ")
    monkeypatch.setenv("PBTFUN_MAX_SHRINKS", "0")
    assert Settings.from_env() == Ok(Settings(seed=7, test_count=25, max_shrinks=0))


def test_blank_values_use_defaults(monkeypatch) -> None:
    monkeypatch.setenv("PBTFUN_SEED", "")
    assert Settings.from_env() == Ok(Settings())


@pytest.mark.parametrize(
    "name,value",
    [
        ("PBTFUN_SEED", "abc"),
        ("PBTFUN_TEST_COUNT", "0"),
        ("PBTFUN_TEST_COUNT", "-3"),
        ("PBTFUN_TEST_COUNT", "1.5"),
        ("PBTFUN_MAX_SHRINKS", "-1"),
    ],
)
def test_invalid_values_are_errors(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    result = Settings.from_env()
    assert isinstance(result, Err)
    assert name in result.message


def test_dotenv_file_is_loaded(monkeypatch, tmp_path) -> None:
    # Registers the variable so the value loaded from .env is removed on teardown.
    monkeypatch.setenv("PBTFUN_TEST_COUNT", "1")
    monkeypatch.delenv("PBTFUN_TEST_COUNT")
    (tmp_path / ".env").write_text("PBTFUN_TEST_COUNT=12\n")
    match Settings.from_env():
        case Ok(settings):
            assert settings.test_count == 12
        case Err(e):
            pytest.fail(f"unexpected error: {e}")


def test_override_replaces_only_given_values() -> None:
    base = Settings(seed=1, test_count=10, max_shrinks=5)
    assert base.override() == base
    assert base.override(seed=2) == Settings(seed=2, test_count=10, max_shrinks=5)
    assert base.override(test_count=3, max_shrinks=0) == Settings(
        seed=1, test_count=3, max_shrinks=0
    )
