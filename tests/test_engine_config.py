import pytest

from core.config import EngineConfig, load_engine_config
from core.domain import Granularity
from core.exceptions import ValidationError
from infra.services import build_engine_services

_VARS = ("PM_BUCKET_COUNT", "PM_BUCKET_GRANULARITY", "PM_DAYS_PER_MONTH", "PM_LOAD_WORKERS", "PM_LOG_LEVEL")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment():
    assert load_engine_config() == EngineConfig()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PM_BUCKET_COUNT", "6")
    monkeypatch.setenv("PM_BUCKET_GRANULARITY", "Quarter")
    monkeypatch.setenv("PM_DAYS_PER_MONTH", "31")
    monkeypatch.setenv("PM_LOAD_WORKERS", "4")
    monkeypatch.setenv("PM_LOG_LEVEL", "debug")

    config = load_engine_config()

    assert config.bucket_count == 6
    assert config.bucket_granularity == Granularity.QUARTER
    assert config.days_per_month == 31
    assert config.load_workers == 4
    assert config.log_level == "DEBUG"


def test_blank_values_keep_defaults(monkeypatch):
    monkeypatch.setenv("PM_BUCKET_COUNT", "  ")
    monkeypatch.setenv("PM_BUCKET_GRANULARITY", "")

    config = load_engine_config()

    assert config.bucket_count == 12
    assert config.bucket_granularity == Granularity.MONTH


@pytest.mark.parametrize(
    "name,value",
    [
        ("PM_BUCKET_COUNT", "twelve"),
        ("PM_BUCKET_COUNT", "0"),
        ("PM_LOAD_WORKERS", "-1"),
        ("PM_DAYS_PER_MONTH", "0"),
        ("PM_BUCKET_GRANULARITY", "fortnight"),
        ("PM_LOG_LEVEL", "chatty"),
    ],
)
def test_invalid_values_are_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError) as exc:
        load_engine_config()
    assert exc.value.code == "CONFIG_INVALID"
    assert name in str(exc.value)


def test_services_share_one_config(monkeypatch):
    monkeypatch.setenv("PM_BUCKET_COUNT", "3")

    services = build_engine_services()

    assert services.config.bucket_count == 3
    assert services.resource_planning_service.config is services.config
    assert set(services.as_dict()) == {"config", "scheduling_engine", "resource_planning_service"}
