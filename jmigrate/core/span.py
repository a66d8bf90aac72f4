# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics and errors.

Lark tokens and `UnexpectedInput` exceptions both expose line/column
attributes, so `Span.from_loc` accepts either and keeps the raw object around
for richer renderers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Best-effort file/line/column location (all fields optional)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a parser location object.

		If `loc` is already a Span it is returned unchanged (with `file` filled
		in when it was missing).
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			if loc.file is None and file is not None:
				return cls(file, loc.line, loc.column, loc.end_line, loc.end_column, loc.raw)
			return loc
		return cls(
			file=file or getattr(loc, "file", None) or getattr(loc, "filename", None),
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
			raw=loc,
		)

	def format(self) -> str:
		"""`file:line:col` with missing parts dropped."""
		parts = [p for p in (self.file, self.line, self.column) if p is not None]
		return ":".join(str(p) for p in parts)

	def to_dict(self) -> dict[str, Any]:
		return {"file": self.file, "line": self.line, "column": self.column}


__all__ = ["Span"]
