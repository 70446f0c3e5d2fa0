from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Type, TypeVar

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .type_validators import VALID_CURRENCIES

T = TypeVar("T", bound=BaseModel)

RECONCILIATION_TOLERANCE = Decimal("0.01")
DEFAULT_CACHE_TTL_SECONDS = 5 * 60


class RuleConfigBase(BaseModel):
    enabled: bool = True


class RequiredFieldsRuleConfig(RuleConfigBase):
    required_fields: List[str] = Field(
        default_factory=lambda: ["facility_id", "counterparty_id", "outstanding_amount", "currency"]
    )


class CurrencyCodeRuleConfig(RuleConfigBase):
    valid_currencies: List[str] = Field(default_factory=lambda: sorted(VALID_CURRENCIES))


class SectorCodeMandatoryRuleConfig(RuleConfigBase):
    # Entity types that must carry a sector (SSIC) code for sectoral exposure reporting.
    entity_types: List[str] = Field(
        default_factory=lambda: [
            "Non-financial Corporates",
            "Non-Bank Financial Institutions (NBFI)",
        ]
    )


class ImpairedAllowanceRuleConfig(RuleConfigBase):
    impaired_classifications: List[str] = Field(default_factory=lambda: ["Substandard", "Doubtful"])


class LtvRatioRuleConfig(RuleConfigBase):
    max_ltv_ratio: Decimal = Decimal("100")


class RelatedPartyExposureRuleConfig(RuleConfigBase):
    # Exposures strictly above this amount need board approval.
    exposure_threshold: Decimal = Decimal("10000000")


class SmeClassificationRuleConfig(RuleConfigBase):
    sme_entity_types: List[str] = Field(default_factory=lambda: ["Non-financial Corporates"])


class ReconciliationRuleConfig(RuleConfigBase):
    tolerance: Decimal = RECONCILIATION_TOLERANCE
    # Amounts are rounded to this step before comparing; None compares them exactly.
    amount_quantize: Optional[Decimal] = Decimal("0.01")


class JournalBalanceRuleConfig(ReconciliationRuleConfig):
    # Statuses listed here are skipped (e.g. drafts still being keyed in).
    excluded_statuses: List[str] = Field(default_factory=list)
    min_postings: int = 2


class LedgerBalanceRuleConfig(ReconciliationRuleConfig):
    # When true, Revenue - Expense is added to the equity side (pre-closing trial balance).
    include_current_earnings: bool = False


class RulesConfig(BaseModel):
    """Per-rule configuration keyed by rule id.

    Rules receive their typed config via `get_rule_config` when the default
    registry is built.
    """

    rules: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    def get_rule_config(
        self,
        rule_id: str,
        model: Type[T],
        default: Optional[T] = None,
    ) -> T:
        if rule_id not in self.rules:
            if default is not None:
                return default
            return model()  # type: ignore[call-arg]
        raw = self.rules.get(rule_id) or {}
        return model.model_validate(raw)


class EngineConfig(BaseModel):
    # None means os.cpu_count().
    max_workers: Optional[int] = Field(default=None, ge=1)
    # None disables the per-rule timeout.
    rule_timeout_seconds: Optional[float] = Field(default=30.0, gt=0)

    cache_enabled: bool = True
    cache_ttl_seconds: float = Field(default=DEFAULT_CACHE_TTL_SECONDS, gt=0)

    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    rules: RulesConfig = Field(default_factory=RulesConfig)


def load_engine_config(path: str | Path) -> EngineConfig:
    """Load an `EngineConfig` from a YAML file.

    Expected layout::

        max_workers: 4
        rule_timeout_seconds: 10
        cache_ttl_seconds: 300
        rules:
          rules:
            BR006:
              exposure_threshold: 5000000
            SCH004:
              enabled: false
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Engine configuration file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Engine configuration in {config_path} must be a mapping")

    try:
        return EngineConfig.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid engine configuration in {config_path}: {exc}") from exc


ENV_OVERRIDES = {
    "ENGINE_MAX_WORKERS": "max_workers",
    "ENGINE_RULE_TIMEOUT_SECONDS": "rule_timeout_seconds",
    "ENGINE_CACHE_ENABLED": "cache_enabled",
    "ENGINE_CACHE_TTL_SECONDS": "cache_ttl_seconds",
    "LOG_LEVEL": "log_level",
    "LOG_FORMAT": "log_format",
}


def get_engine_config(path: str | Path | None = None) -> EngineConfig:
    """
    Build the engine configuration for a deployment.

    Reads `.env` (python-dotenv), then the YAML file at `path` or
    ENGINE_CONFIG_PATH when set, then applies the ENGINE_* / LOG_* environment
    overrides listed in ENV_OVERRIDES.
    """
    load_dotenv()

    config_path = path or os.getenv("ENGINE_CONFIG_PATH", "").strip()
    base = load_engine_config(config_path) if config_path else EngineConfig()

    overrides: Dict[str, Any] = {}
    for env_name, field_name in ENV_OVERRIDES.items():
        value = os.getenv(env_name, "").strip()
        if value:
            overrides[field_name] = value
    if not overrides:
        return base

    try:
        return EngineConfig.model_validate({**base.model_dump(), **overrides})
    except ValidationError as exc:
        raise ValueError(f"Invalid engine configuration in environment: {exc}") from exc
