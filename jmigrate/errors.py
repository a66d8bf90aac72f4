# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from jmigrate.core.span import Span


@dataclass(frozen=True)
class JMigrateError(Exception):
	"""
	A structured, serializable error for jmigrate tooling.

	`reason_code` is stable and machine-readable:
	  parse-error      source text outside the supported Java subset
	  bad-config       rule options file unreadable or malformed
	  bad-classpath    classpath stub file unreadable or malformed
	  unknown-recipe   no recipe registered under the requested name
	  io-error         an input file could not be read or written
	"""

	reason_code: str
	message: str
	path: str | None = None
	span: Span | None = None

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {
			"reason_code": self.reason_code,
			"message": self.message,
			"path": self.path,
			"span": self.span.to_dict() if self.span is not None else None,
		}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.span is not None and self.span.line is not None:
			parts.append(f"at={self.span.format()}")
		elif self.path:
			parts.append(f"path={self.path}")
		return " ".join(parts)


__all__ = ["JMigrateError"]
