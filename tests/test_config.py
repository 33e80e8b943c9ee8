import pytest

from pricewise.core.config import Config, Settings
from pricewise.domain.errors import InvalidPolicyError
from pricewise.domain.models import AggregationPolicy, Market

PREFIX = "PRICEWISE_TEST_"


def test_load_from_env_with_prefix(monkeypatch):
    monkeypatch.setenv(f"{PREFIX}MAX_DISCOUNT_RATE", "0.3")
    raw = Config.load_from_env(PREFIX, log_level="INFO")
    assert raw["max_discount_rate"] == "0.3"
    assert raw["log_level"] == "INFO"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv(f"{PREFIX}MAX_DISCOUNT_RATE", "0.3")
    monkeypatch.setenv(f"{PREFIX}ONLY_BEST_ONE", "yes")
    monkeypatch.setenv(f"{PREFIX}EXCLUSIVE_GROUPS", "membership, coupon,")
    monkeypatch.setenv(f"{PREFIX}DEFAULT_MARKET", "kr")
    monkeypatch.setenv(f"{PREFIX}LOG_LEVEL", "debug")
    settings = Settings.from_env(PREFIX)
    assert settings == Settings(
        max_discount_rate=0.3,
        only_best_one=True,
        exclusive_groups=frozenset({"membership", "coupon"}),
        default_market=Market.KR,
        log_level="DEBUG",
    )
    assert settings.policy() == AggregationPolicy.of(0.3, True, ["membership", "coupon"])


def test_defaults_without_env():
    settings = Settings.from_env(PREFIX)
    assert settings == Settings()
    assert settings.policy() == AggregationPolicy()


@pytest.mark.parametrize(
    "name, value",
    [
        ("MAX_DISCOUNT_RATE", "1.5"),
        ("MAX_DISCOUNT_RATE", "-0.1"),
        ("MAX_DISCOUNT_RATE", "lots"),
        ("ONLY_BEST_ONE", "maybe"),
        ("DEFAULT_MARKET", "MARS"),
    ],
)
def test_bad_values(monkeypatch, name, value):
    monkeypatch.setenv(f"{PREFIX}{name}", value)
    with pytest.raises(InvalidPolicyError):
        Settings.from_env(PREFIX)


def test_policy_rate_bounds():
    AggregationPolicy(max_discount_rate=0)
    AggregationPolicy(max_discount_rate=1)
    with pytest.raises(InvalidPolicyError):
        AggregationPolicy(max_discount_rate=1.01)


def test_policy_groups_become_frozenset():
    assert AggregationPolicy(exclusive_groups={"a"}).exclusive_groups == frozenset({"a"})


def test_policy_rejects_bool_rate():
    with pytest.raises(InvalidPolicyError):
        AggregationPolicy(max_discount_rate=True)
