import pytest

from common.compliance_engine.config import (
    DEFAULT_CACHE_TTL_SECONDS,
    EngineConfig,
    LtvRatioRuleConfig,
    RuleConfigBase,
    RulesConfig,
    get_engine_config,
    load_engine_config,
)


def test_defaults():
    cfg = EngineConfig()
    assert cfg.cache_ttl_seconds == DEFAULT_CACHE_TTL_SECONDS == 300
    assert cfg.rule_timeout_seconds == 30.0
    assert cfg.max_workers is None
    assert cfg.cache_enabled is True


def test_load_engine_config_from_yaml(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text(
        "max_workers: 4\n"
        "rule_timeout_seconds: 5\n"
        "log_format: text\n"
        "rules:\n"
        "  rules:\n"
        "    BR004:\n"
        "      max_ltv_ratio: 80\n"
        "    SCH004:\n"
        "      enabled: false\n",
        encoding="utf-8",
    )
    cfg = load_engine_config(path)

    assert cfg.max_workers == 4
    assert cfg.rule_timeout_seconds == 5
    assert cfg.log_format == "text"
    assert cfg.rules.get_rule_config("BR004", LtvRatioRuleConfig).max_ltv_ratio == 80
    assert cfg.rules.get_rule_config("SCH004", RuleConfigBase).enabled is False
    assert cfg.rules.get_rule_config("BR001", RuleConfigBase).enabled is True


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("", encoding="utf-8")
    assert load_engine_config(path) == EngineConfig()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_engine_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "content",
    [
        "max_workers: [unclosed\n",
        "- just\n- a list\n",
        "max_workers: 0\n",
        "log_format: xml\n",
    ],
)
def test_invalid_config_raises_value_error(tmp_path, content):
    path = tmp_path / "engine.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        load_engine_config(path)


def test_get_rule_config_default_when_absent():
    rules = RulesConfig()
    fallback = LtvRatioRuleConfig(max_ltv_ratio=50)
    assert rules.get_rule_config("BR004", LtvRatioRuleConfig, default=fallback) is fallback
    assert rules.get_rule_config("BR004", LtvRatioRuleConfig).max_ltv_ratio == 100


def test_get_engine_config_applies_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "engine.yaml"
    path.write_text("max_workers: 2\ncache_ttl_seconds: 60\n", encoding="utf-8")
    monkeypatch.setenv("ENGINE_CONFIG_PATH", str(path))
    monkeypatch.setenv("ENGINE_MAX_WORKERS", "6")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    cfg = get_engine_config()
    assert cfg.max_workers == 6
    assert cfg.cache_ttl_seconds == 60
    assert cfg.log_level == "DEBUG"


def test_get_engine_config_rejects_bad_env(monkeypatch):
    monkeypatch.delenv("ENGINE_CONFIG_PATH", raising=False)
    monkeypatch.setenv("ENGINE_RULE_TIMEOUT_SECONDS", "-1")
    with pytest.raises(ValueError):
        get_engine_config()
