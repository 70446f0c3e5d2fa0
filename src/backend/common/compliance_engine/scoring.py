"""Aggregate a raw result stream into a `ValidationSummary`.

Two granularities are reported side by side and never mixed:

* rule level: `overall_score`, `passed_rules`/`failed_rules`/`warning_rules`
  and `category_rule_scores` count rule ids, each classified by the worst
  status it produced in the run;
* result level: `category_scores`, `failed_results`/`warning_results` and the
  severity counts count individual findings.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from .models import (
    RuleCategory,
    Severity,
    StatusOrdering,
    ValidationResult,
    ValidationStatus,
    ValidationSummary,
)


def _pct(numerator: int, denominator: int) -> float:
    if denominator == 0:
        return 100.0
    return round(100.0 * numerator / denominator, 2)


def rule_statuses(
    results: Sequence[ValidationResult],
    rule_ids: Sequence[str],
    ordering: Optional[StatusOrdering] = None,
) -> Dict[str, ValidationStatus]:
    ordering = ordering or StatusOrdering.default()
    by_rule: Dict[str, List[ValidationStatus]] = {rule_id: [] for rule_id in rule_ids}
    for res in results:
        if res.rule_id in by_rule:
            by_rule[res.rule_id].append(res.status)
    return {rule_id: ordering.worst(statuses) for rule_id, statuses in by_rule.items()}


def summarize(
    results: Sequence[ValidationResult],
    *,
    evaluated_rule_ids: Sequence[str],
    rule_categories: Dict[str, RuleCategory],
    total_rules: int,
    total_records: int,
    execution_time: float = 0.0,
    incomplete: bool = False,
    cache_hit: bool = False,
    run_timestamp: Optional[datetime] = None,
) -> ValidationSummary:
    statuses = rule_statuses(results, evaluated_rule_ids)
    passed_rules = sum(1 for s in statuses.values() if s == ValidationStatus.PASS)
    failed_rules = sum(1 for s in statuses.values() if s == ValidationStatus.FAIL)
    warning_rules = sum(1 for s in statuses.values() if s == ValidationStatus.WARNING)

    failed = [r for r in results if r.status == ValidationStatus.FAIL]
    warnings = [r for r in results if r.status == ValidationStatus.WARNING]
    severity_counts = {sev: 0 for sev in Severity}
    for res in failed:
        severity_counts[res.severity] += 1

    category_scores: Dict[RuleCategory, float] = {}
    category_rule_scores: Dict[RuleCategory, float] = {}
    for category in RuleCategory:
        in_category = [r for r in results if r.category == category]
        passes = sum(1 for r in in_category if r.status == ValidationStatus.PASS)
        category_scores[category] = _pct(passes, len(in_category))

        rule_ids = [rid for rid in statuses if rule_categories.get(rid) == category]
        rule_passes = sum(1 for rid in rule_ids if statuses[rid] == ValidationStatus.PASS)
        category_rule_scores[category] = _pct(rule_passes, len(rule_ids))

    return ValidationSummary(
        total_rules=total_rules,
        evaluated_rules=len(statuses),
        total_records=total_records,
        passed_rules=passed_rules,
        failed_rules=failed_rules,
        warning_rules=warning_rules,
        failed_results=len(failed),
        warning_results=len(warnings),
        critical_issues=severity_counts[Severity.CRITICAL],
        high_issues=severity_counts[Severity.HIGH],
        medium_issues=severity_counts[Severity.MEDIUM],
        low_issues=severity_counts[Severity.LOW],
        overall_score=_pct(passed_rules, len(statuses)),
        category_scores=category_scores,
        category_rule_scores=category_rule_scores,
        results=list(results),
        execution_time=execution_time,
        last_run_timestamp=run_timestamp or datetime.now(timezone.utc),
        incomplete=incomplete,
        cache_hit=cache_hit,
    )
