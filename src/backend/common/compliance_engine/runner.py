from __future__ import annotations

import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from common.observability.logger import log_operation, setup_logger

from .cache import TTLCache
from .config import EngineConfig
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
from .rule import Rule
from .scoring import summarize
from .snapshot import ValidationSnapshot

LOGGER_NAME = "compliance-engine.runner"


class CancellationToken:
    """Cooperative cancel flag checked by the engine between rules."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(frozen=True)
class RuleOutcome:
    rule_id: str
    results: Tuple[ValidationResult, ...] = ()
    error: Optional[EngineError] = None
    skipped: bool = False


@dataclass(frozen=True)
class _Batch:
    results: List[ValidationResult] = field(default_factory=list)
    evaluated_rule_ids: List[str] = field(default_factory=list)
    incomplete: bool = False


def engine_failure(
    rule_id: str,
    message: str,
    snapshot: ValidationSnapshot,
    *,
    category: Optional[RuleCategory] = None,
    rule_type: Optional[RuleType] = None,
) -> ValidationResult:
    return ValidationResult(
        rule_id=rule_id,
        status=ValidationStatus.FAIL,
        severity=Severity.CRITICAL,
        message=message,
        impact="System error in validation process",
        category=category,
        rule_type=rule_type,
        timestamp=snapshot.generated_at,
    )


def _normalize(rule: Rule, raw: object, snapshot: ValidationSnapshot) -> Tuple[ValidationResult, ...]:
    if not isinstance(raw, (list, tuple)):
        raise TypeError(f"evaluate() returned {type(raw).__name__}, expected a list of ValidationResult")
    results = list(raw)
    for res in results:
        if not isinstance(res, ValidationResult):
            raise TypeError(f"evaluate() returned {type(res).__name__} inside its result list")
        if res.rule_id != rule.rule_id:
            raise ValueError(f"evaluate() emitted a result for foreign rule id {res.rule_id!r}")
    if not results:
        return (rule.passed(snapshot),)
    issues = [r for r in results if r.status != ValidationStatus.PASS]
    if issues:
        return tuple(issues)
    # A clean run is reported as a single Pass.
    return (results[0],)


class ValidationEngine:
    def __init__(
        self,
        registry: Optional[RuleRegistry] = None,
        *,
        config: Optional[EngineConfig] = None,
        cache: Optional[TTLCache[str, Tuple[ValidationResult, ...]]] = None,
    ):
        self._config = config or EngineConfig()
        self._registry = registry if registry is not None else default_registry(self._config.rules)
        self._cache: TTLCache[str, Tuple[ValidationResult, ...]] = (
            cache if cache is not None else TTLCache(self._config.cache_ttl_seconds)
        )
        self._logger = setup_logger(LOGGER_NAME, self._config.log_level, self._config.log_format)

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    @property
    def config(self) -> EngineConfig:
        return self._config

    def add_rule(self, rule: Rule) -> RuleRegistry:
        self._registry = self._registry.with_rule(rule)
        self.clear_cache()
        return self._registry

    def remove_rule(self, rule_id: str) -> RuleRegistry:
        self._registry = self._registry.without_rule(rule_id)
        self.clear_cache()
        return self._registry

    def clear_cache(self) -> None:
        self._cache.clear()

    def statistics(self) -> RuleStatistics:
        by_category = {c: 0 for c in RuleCategory}
        by_rule_type = {t: 0 for t in RuleType}
        by_severity = {s: 0 for s in Severity}
        for rule in self._registry:
            by_category[rule.category] += 1
            by_rule_type[rule.rule_type] += 1
            by_severity[rule.severity] += 1
        return RuleStatistics(
            total_rules=len(self._registry),
            by_category=by_category,
            by_rule_type=by_rule_type,
            by_severity=by_severity,
        )

    def run_all(
        self,
        snapshot: ValidationSnapshot,
        *,
        cache_key: Optional[str] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> ValidationSummary:
        rules = self._registry.all()
        categories: Dict[str, RuleCategory] = {rule.rule_id: rule.category for rule in rules}
        started = time.perf_counter()

        if cache_key is not None and self._config.cache_enabled:
            cached = self._cache.get(cache_key)
            if cached is not None:
                self._logger.debug("Validation cache hit", extra={"cache_key": cache_key})
                return summarize(
                    cached,
                    evaluated_rule_ids=[rule.rule_id for rule in rules],
                    rule_categories=categories,
                    total_rules=len(rules),
                    total_records=snapshot.total_records,
                    execution_time=time.perf_counter() - started,
                    cache_hit=True,
                )

        with log_operation(
            "run_all",
            logger=self._logger,
            rule_count=len(rules),
            record_count=snapshot.total_records,
        ):
            batch = self._execute(rules, snapshot, cancel)

        if cache_key is not None and self._config.cache_enabled and not batch.incomplete:
            self._cache.set(cache_key, tuple(batch.results))

        summary = summarize(
            batch.results,
            evaluated_rule_ids=batch.evaluated_rule_ids,
            rule_categories=categories,
            total_rules=len(rules),
            total_records=snapshot.total_records,
            execution_time=time.perf_counter() - started,
            incomplete=batch.incomplete,
        )
        self._logger.info(
            "Validation summary",
            extra={
                "overall_score": summary.overall_score,
                "result_count": len(summary.results),
                "failed_rules": summary.failed_rules,
                "warning_rules": summary.warning_rules,
                "incomplete": summary.incomplete,
            },
        )
        return summary

    def run_by_category(
        self,
        category: RuleCategory,
        snapshot: ValidationSnapshot,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> List[ValidationResult]:
        return self._execute(self._registry.by_category(category), snapshot, cancel).results

    def run_by_type(
        self,
        rule_type: RuleType,
        snapshot: ValidationSnapshot,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> List[ValidationResult]:
        return self._execute(self._registry.by_type(rule_type), snapshot, cancel).results

    def run_single(self, rule_id: str, snapshot: ValidationSnapshot) -> List[ValidationResult]:
        try:
            rule = self._registry.get(rule_id)
        except UnknownRuleError as exc:
            self._logger.warning("Unknown validation rule requested", extra={"rule_id": rule_id})
            return [engine_failure(rule_id, exc.message, snapshot)]
        return self._execute([rule], snapshot, None).results

    def _worker_count(self, rule_count: int) -> int:
        workers = self._config.max_workers or os.cpu_count() or 1
        return max(1, min(workers, rule_count))

    def _evaluate_isolated(
        self,
        rule: Rule,
        snapshot: ValidationSnapshot,
        cancel: Optional[CancellationToken],
        started_at: Dict[str, float],
    ) -> RuleOutcome:
        if cancel is not None and cancel.cancelled:
            return RuleOutcome(rule_id=rule.rule_id, skipped=True)
        started_at[rule.rule_id] = time.monotonic()
        try:
            raw = rule.evaluate(snapshot)
            return RuleOutcome(rule_id=rule.rule_id, results=_normalize(rule, raw, snapshot))
        except Exception as exc:
            self._logger.warning(
                "Validation rule raised",
                extra={"rule_id": rule.rule_id, "error_type": type(exc).__name__},
                exc_info=True,
            )
            return RuleOutcome(rule_id=rule.rule_id, error=RuleExecutionError(rule.rule_id, exc))

    def _await(
        self,
        rule: Rule,
        future: Future,
        started_at: Dict[str, float],
        queue_budget: float,
    ) -> RuleOutcome:
        timeout = self._config.rule_timeout_seconds
        if timeout is None:
            return future.result()

        # The timeout runs from the moment the rule starts; while it is still
        # queued behind other rules we wait, but never beyond queue_budget.
        queued_deadline = time.monotonic() + queue_budget
        while True:
            start = started_at.get(rule.rule_id)
            now = time.monotonic()
            if start is not None:
                wait = max(0.0, start + timeout - now)
            else:
                remaining = queued_deadline - now
                if remaining <= 0:
                    break
                wait = min(timeout, remaining)
            try:
                return future.result(timeout=wait)
            except FutureTimeoutError:
                if start is not None:
                    break

        future.cancel()
        self._logger.warning(
            "Validation rule timed out",
            extra={"rule_id": rule.rule_id, "timeout_seconds": timeout},
        )
        return RuleOutcome(rule_id=rule.rule_id, error=RuleTimeoutError(rule.rule_id, timeout))

    def _execute(
        self,
        rules: Sequence[Rule],
        snapshot: ValidationSnapshot,
        cancel: Optional[CancellationToken],
    ) -> _Batch:
        if not rules:
            return _Batch()

        workers = self._worker_count(len(rules))
        timeout = self._config.rule_timeout_seconds or 0.0
        # Enough for every rule ahead in the queue to use its full timeout.
        queue_budget = timeout * (len(rules) // workers + 1)
        started_at: Dict[str, float] = {}

        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="rule-worker")
        try:
            futures = [
                executor.submit(self._evaluate_isolated, rule, snapshot, cancel, started_at) for rule in rules
            ]
            # Collected in submission order, i.e. registry order.
            outcomes = [
                self._await(rule, future, started_at, queue_budget) for rule, future in zip(rules, futures)
            ]
        finally:
            # Timed-out rules keep their worker thread; do not wait for them.
            executor.shutdown(wait=False, cancel_futures=True)

        batch = _Batch()
        for rule, outcome in zip(rules, outcomes):
            if outcome.skipped:
                continue
            batch.evaluated_rule_ids.append(rule.rule_id)
            if outcome.error is not None:
                batch.results.append(
                    engine_failure(
                        rule.rule_id,
                        outcome.error.message,
                        snapshot,
                        category=rule.category,
                        rule_type=rule.rule_type,
                    )
                )
            else:
                batch.results.extend(outcome.results)

        if len(batch.evaluated_rule_ids) < len(rules):
            self._logger.info(
                "Validation run cancelled",
                extra={"evaluated": len(batch.evaluated_rule_ids), "requested": len(rules)},
            )
            return _Batch(batch.results, batch.evaluated_rule_ids, incomplete=True)
        return batch
