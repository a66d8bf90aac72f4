# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Rule options for the exception-migration recipes.

The defaults describe the Jackson 2 → 3 migration. A JSON file may override
any of them:

    {
      "legacy_type": "java.io.IOException",
      "replacement_type": "tools.jackson.core.JacksonException",
      "api_patterns": ["com.fasterxml.jackson.databind.ObjectMapper *(..)"]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Tuple

from jmigrate.errors import JMigrateError
from jmigrate.search.method_matcher import MethodMatcher

IO_EXCEPTION = "java.io.IOException"
JACKSON_EXCEPTION = "tools.jackson.core.JacksonException"
JACKSON_API_PATTERNS: Tuple[str, ...] = (
	"com.fasterxml.jackson.databind.ObjectMapper *(..)",
	"com.fasterxml.jackson.databind.ObjectReader *(..)",
	"com.fasterxml.jackson.databind.ObjectWriter *(..)",
)

_KEYS = frozenset({"legacy_type", "replacement_type", "api_patterns"})


@dataclass(frozen=True)
class RuleOptions:
	legacy_type: str = IO_EXCEPTION
	replacement_type: str = JACKSON_EXCEPTION
	api_patterns: Tuple[str, ...] = JACKSON_API_PATTERNS


def _bad(message: str, path: str | None) -> JMigrateError:
	return JMigrateError(reason_code="bad-config", message=message, path=path)


def rule_options_from_dict(data: Any, path: str | None = None) -> RuleOptions:
	if not isinstance(data, Mapping):
		raise _bad("rule options must be a JSON object", path)
	unknown = sorted(set(data) - _KEYS)
	if unknown:
		raise _bad(f"unknown option(s): {', '.join(unknown)}", path)
	opts = RuleOptions()
	legacy = data.get("legacy_type", opts.legacy_type)
	replacement = data.get("replacement_type", opts.replacement_type)
	for key, value in (("legacy_type", legacy), ("replacement_type", replacement)):
		if not isinstance(value, str) or not value.strip():
			raise _bad(f"{key} must be a non-empty string", path)
	if legacy == replacement:
		raise _bad("legacy_type and replacement_type must differ", path)
	patterns = data.get("api_patterns", list(opts.api_patterns))
	if not isinstance(patterns, list) or not patterns or not all(isinstance(p, str) for p in patterns):
		raise _bad("api_patterns must be a non-empty list of strings", path)
	for pattern in patterns:
		try:
			MethodMatcher(pattern)
		except ValueError as exc:
			raise _bad(str(exc), path) from exc
	return RuleOptions(legacy_type=legacy, replacement_type=replacement, api_patterns=tuple(patterns))


def load_rule_options(path: Path) -> RuleOptions:
	"""Read rule options from a JSON file; raises `JMigrateError(bad-config)` on any problem."""
	try:
		text = Path(path).read_text(encoding="utf-8")
	except OSError as exc:
		raise _bad(f"cannot read config: {exc}", str(path)) from exc
	try:
		data = json.loads(text)
	except json.JSONDecodeError as exc:
		raise _bad(f"invalid JSON: {exc}", str(path)) from exc
	return rule_options_from_dict(data, str(path))


__all__ = [
	"IO_EXCEPTION",
	"JACKSON_EXCEPTION",
	"JACKSON_API_PATTERNS",
	"RuleOptions",
	"rule_options_from_dict",
	"load_rule_options",
]
