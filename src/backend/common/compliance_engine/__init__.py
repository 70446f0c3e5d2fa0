"""Rule-based data-quality and regulatory-compliance validation for banking ledgers.

This package contains only domain logic:
- Rule inputs are immutable entity snapshots plus per-rule config.
- No database, file-format or network access lives here.
"""

from .config import EngineConfig, RulesConfig, get_engine_config, load_engine_config
from .errors import EngineError, RuleExecutionError, RuleTimeoutError, UnknownRuleError
from .models import (
    RuleCategory,
    RuleStatistics,
    RuleType,
    Severity,
    ValidationResult,
    ValidationStatus,
    ValidationSummary,
)
from .registry import RuleRegistry, default_registry
from .rule import RecordRule, Rule
from .runner import CancellationToken, ValidationEngine
from .snapshot import ValidationSnapshot
