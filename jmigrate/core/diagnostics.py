# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for parser, attribution and rule passes.

Rules never raise on odd input; they fall back to "leave the tree as it is".
When that happens they record a Diagnostic with severity "note" so callers
can see why nothing changed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .span import Span


@dataclass(frozen=True)
class Diagnostic:
	"""A non-fatal message produced by a pass (error/warning/note)."""

	message: str
	code: str | None = None
	# Pass that produced the diagnostic ("parser", "attribution", or a recipe name).
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)
	notes: tuple[str, ...] = ()

	def format_human(self) -> str:
		where = self.span.format()
		head = f"{where}: " if where else ""
		code = f"[{self.code}] " if self.code else ""
		return f"{head}{self.severity}: {code}{self.message}"

	def to_dict(self) -> dict[str, Any]:
		return {
			"message": self.message,
			"code": self.code,
			"phase": self.phase,
			"severity": self.severity,
			"span": self.span.to_dict(),
			"notes": list(self.notes),
		}


__all__ = ["Diagnostic"]
