# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Import maintenance.

Rules record which types they started or stopped referencing in an
`ImportDelta`; `apply_import_delta` reconciles the compilation unit's import
list against the tree as it is *after* the rewrite:

- an import is added only if the type is now referenced by simple name and
  is not already visible (same package, `java.lang`, an explicit import or a
  wildcard import of its package);
- an explicit import is removed only if nothing outside the import list
  still refers to the type by simple name.

So a delta is a list of candidates, and applying the same delta twice is a
no-op.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set

from jmigrate import types as T
from jmigrate.classpath import Classpath
from jmigrate.tree import nodes as N
from jmigrate.tree.space import RightPadded, Space
from jmigrate.tree.traversal import walk

from .change_type import qualified_name_tree


@dataclass(frozen=True)
class ImportDelta:
	added: FrozenSet[str] = frozenset()
	removed: FrozenSet[str] = frozenset()

	@classmethod
	def of(cls, added: Iterable[str] = (), removed: Iterable[str] = ()) -> "ImportDelta":
		return cls(frozenset(added), frozenset(removed))

	def merge(self, other: "ImportDelta") -> "ImportDelta":
		return ImportDelta(self.added | other.added, self.removed | other.removed)

	@property
	def is_empty(self) -> bool:
		return not self.added and not self.removed

	def to_dict(self) -> Dict[str, Any]:
		return {"added": sorted(self.added), "removed": sorted(self.removed)}


EMPTY_DELTA = ImportDelta()


def simple_name_references(cu: N.CompilationUnit) -> Set[str]:
	"""Fully-qualified names of types referenced by simple name outside the import list."""
	refs: Set[str] = set()
	for cls in cu.classes:
		for node in walk(cls):
			if isinstance(node, N.Identifier) and isinstance(node.type, T.ClassType):
				if node.simple_name == node.type.simple_name:
					refs.add(node.type.fqn)
	return refs


def _is_visible(cu: N.CompilationUnit, fqn: str) -> bool:
	package = fqn.rpartition(".")[0]
	if package in ("java.lang", cu.package_name):
		return True
	for rp in cu.imports:
		imp = rp.element
		if imp.static is not None:
			continue
		if imp.type_name == fqn or (imp.is_wildcard and imp.package_name == package):
			return True
	return False


def _name_taken(cu: N.CompilationUnit, fqn: str) -> bool:
	simple = fqn.rsplit(".", 1)[-1]
	return any(
		rp.element.static is None and not rp.element.is_wildcard and rp.element.class_name == simple
		and rp.element.type_name != fqn
		for rp in cu.imports
	)


def simple_name_taken(cu: N.CompilationUnit, fqn: str, classpath: Optional[Classpath] = None) -> bool:
	"""
	True if the simple name of `fqn` already means another class in `cu`: an
	explicit import of a different type, a class declared in the file, or (with
	`classpath`) a class of the same name in the file's own package.
	"""
	if _name_taken(cu, fqn):
		return True
	simple = fqn.rsplit(".", 1)[-1]
	for cls in cu.classes:
		if any(isinstance(n, N.ClassDeclaration) and n.name.simple_name == simple for n in walk(cls)):
			return True
	package = cu.package_name
	if classpath is not None and package != fqn.rpartition(".")[0]:
		return classpath.package_has(package, simple)
	return False


def remove_import(cu: N.CompilationUnit, fqn: str) -> N.CompilationUnit:
	imports = list(cu.imports)
	for i, rp in enumerate(imports):
		imp = rp.element
		if imp.static is None and not imp.is_wildcard and imp.type_name == fqn:
			break
	else:
		return cu
	removed = imports.pop(i)
	classes = cu.classes
	if i == 0 and imports:
		imports[0] = imports[0].with_element(replace(imports[0].element, prefix=removed.element.prefix))
	elif not imports and cu.package is None and classes:
		classes = (replace(classes[0], prefix=removed.element.prefix),) + classes[1:]
	return replace(cu, imports=tuple(imports), classes=classes)


def add_import(cu: N.CompilationUnit, fqn: str) -> N.CompilationUnit:
	imports: List[RightPadded[N.Import]] = list(cu.imports)
	classes = cu.classes
	new = N.Import(prefix=Space("\n"), qualid=qualified_name_tree(fqn, Space(" ")))  # type: ignore[arg-type]
	if not imports:
		if cu.package is not None:
			new = replace(new, prefix=Space("\n\n"))
		else:
			new = replace(new, prefix=Space(""))
			if classes and "\n" not in classes[0].prefix.whitespace:
				classes = (replace(classes[0], prefix=Space("\n\n" + classes[0].prefix.whitespace)),) + classes[1:]
		return replace(cu, imports=(RightPadded(new),), classes=classes)
	index = len(imports)
	for i, rp in enumerate(imports):
		if rp.element.static is None and rp.element.type_name > fqn:
			index = i
			break
	if index == 0:
		first = imports[0]
		new = replace(new, prefix=first.element.prefix)
		imports[0] = first.with_element(replace(first.element, prefix=Space("\n")))
	imports.insert(index, RightPadded(new))
	return replace(cu, imports=tuple(imports), classes=classes)


def apply_import_delta(cu: N.CompilationUnit, delta: ImportDelta) -> N.CompilationUnit:
	"""Reconcile `cu`'s imports with `delta` (see module docstring); returns `cu` itself when nothing applies."""
	if delta.is_empty:
		return cu
	refs = simple_name_references(cu)
	for fqn in sorted(delta.removed):
		if fqn not in refs:
			cu = remove_import(cu, fqn)
	for fqn in sorted(delta.added):
		if fqn in refs and not _is_visible(cu, fqn) and not _name_taken(cu, fqn):
			cu = add_import(cu, fqn)
	return cu


__all__ = [
	"ImportDelta",
	"EMPTY_DELTA",
	"simple_name_references",
	"simple_name_taken",
	"add_import",
	"remove_import",
	"apply_import_delta",
]
