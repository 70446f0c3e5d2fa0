from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel

from .models import RuleCategory, RuleType, Severity
from .registry import RuleRegistry, default_registry


class RuleCatalogEntry(BaseModel):
    rule_id: str
    name: str
    category: RuleCategory
    severity: Severity
    rule_type: RuleType
    description: str = ""

    module: str
    class_name: str

    config_model: str
    config_schema: Dict[str, Any]


def build_catalog(registry: Optional[RuleRegistry] = None) -> List[RuleCatalogEntry]:
    registry = registry if registry is not None else default_registry()
    entries: List[RuleCatalogEntry] = []
    for rule in registry:
        rule_cls = type(rule)
        cfg_model = rule.config_model
        entries.append(
            RuleCatalogEntry(
                rule_id=rule.rule_id,
                name=rule.name,
                category=rule.category,
                severity=rule.severity,
                rule_type=rule.rule_type,
                description=rule.description,
                module=rule_cls.__module__,
                class_name=rule_cls.__name__,
                config_model=cfg_model.__name__,
                config_schema=cfg_model.model_json_schema(),
            )
        )
    return entries


def _dump_json(catalog: list[dict[str, Any]]) -> str:
    return json.dumps(catalog, indent=2, sort_keys=True)


def _dump_yaml(catalog: list[dict[str, Any]]) -> str:
    return yaml.safe_dump(catalog, sort_keys=True)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print the compliance rule catalog.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    args = parser.parse_args(argv)

    catalog = [e.model_dump(mode="json") for e in build_catalog()]
    if args.format == "json":
        print(_dump_json(catalog))
    else:
        print(_dump_yaml(catalog))


if __name__ == "__main__":
    main()
