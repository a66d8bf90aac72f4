# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Formatting carriers for the lossless tree.

Every node owns the whitespace (and comments) that precede it as its
`prefix`. Separators that belong to a parent rather than a child (the comma
after an argument, the `|` after a multi-catch alternative, the `;` after a
statement) are modelled with padding wrappers:

  RightPadded(element, after)   element, then `after`, then the separator
  LeftPadded(before, element)   `before`, then the keyword/separator, then element
  Container(before, elements)   `before`, open delimiter, padded elements, close

The printer owns the delimiter text; these classes only hold the spacing.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Generic, Tuple, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class Space:
	"""Raw whitespace/comment text preceding a token."""

	whitespace: str = ""

	@property
	def is_empty(self) -> bool:
		return self.whitespace == ""

	def __str__(self) -> str:
		return self.whitespace


Space.EMPTY = Space("")  # type: ignore[attr-defined]
Space.SINGLE_SPACE = Space(" ")  # type: ignore[attr-defined]


@dataclass(frozen=True)
class RightPadded(Generic[T]):
	element: T
	after: Space = Space("")

	def with_element(self, element: T) -> "RightPadded[T]":
		if element is self.element:
			return self
		return replace(self, element=element)

	def with_after(self, after: Space) -> "RightPadded[T]":
		if after == self.after:
			return self
		return replace(self, after=after)


@dataclass(frozen=True)
class LeftPadded(Generic[T]):
	before: Space
	element: T

	def with_element(self, element: T) -> "LeftPadded[T]":
		if element is self.element:
			return self
		return replace(self, element=element)


@dataclass(frozen=True)
class Container(Generic[T]):
	"""
	Delimited, comma-separated list.

	`before` is the space before the opening delimiter (or keyword, for
	`throws`/`implements`). When the list is empty, `end` holds the space
	between the delimiters; otherwise the last element's `after` does.
	"""

	before: Space
	elements: Tuple[RightPadded[T], ...] = ()
	end: Space = Space("")

	@property
	def items(self) -> Tuple[T, ...]:
		return tuple(rp.element for rp in self.elements)


__all__ = ["Space", "RightPadded", "LeftPadded", "Container"]
