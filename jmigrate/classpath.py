# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Classpath: declared classes, their hierarchy and method signatures.

The attributor does not compile against real jars. Instead it consults a
table of stub declarations: the built-in stubs shipped in
`stubs/builtin.json` (JDK exception/IO types and the Jackson 2 and 3 types
the migration rules care about), any extra stub files passed by the user,
and the classes declared in the file being attributed.

Stub file format (JSON):

    {
      "classes": [
        {
          "name": "com.acme.Client",
          "kind": "class",                  # or "interface"
          "super": "java.lang.Object",
          "interfaces": [],
          "constructors": [{"params": ["java.lang.String"], "throws": []}],
          "methods": [
            {"name": "fetch", "params": ["java.lang.String"],
             "returns": "java.lang.String", "throws": ["java.io.IOException"]}
          ]
        }
      ]
    }

Overloads are resolved by name and arity only.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from jmigrate.errors import JMigrateError
from jmigrate.types import (
	CONSTRUCTOR_NAME,
	ArrayType,
	ClassType,
	JavaType,
	MethodType,
	PrimitiveType,
)


_BUILTIN_STUBS = Path(__file__).with_name("stubs") / "builtin.json"

PRIMITIVES = frozenset({"boolean", "byte", "char", "short", "int", "long", "float", "double", "void"})
OBJECT = "java.lang.Object"


@dataclass(frozen=True)
class MethodInfo:
	"""Stub-level method signature; types are fully-qualified names."""

	name: str
	params: Tuple[str, ...] = ()
	returns: Optional[str] = None
	throws: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ClassInfo:
	fqn: str
	kind: str = "class"
	supertype: Optional[str] = OBJECT
	interfaces: Tuple[str, ...] = ()
	methods: Tuple[MethodInfo, ...] = ()
	constructors: Tuple[MethodInfo, ...] = ()


class Classpath:
	"""
	Immutable lookup table of ClassInfo by fully-qualified name.

	`extend` returns a new Classpath; ClassType objects are memoized per
	instance.
	"""

	def __init__(self, infos: Iterable[ClassInfo] = ()) -> None:
		self._infos: Dict[str, ClassInfo] = {info.fqn: info for info in infos}
		self._types: Dict[str, ClassType] = {}

	def __contains__(self, fqn: str) -> bool:
		return fqn in self._infos

	def info(self, fqn: str) -> Optional[ClassInfo]:
		return self._infos.get(fqn)

	def package_has(self, package: str, simple_name: str) -> bool:
		return f"{package}.{simple_name}" in self._infos if package else simple_name in self._infos

	def extend(self, infos: Iterable[ClassInfo]) -> "Classpath":
		"""New classpath with `infos` added (later entries win)."""
		merged = dict(self._infos)
		for info in infos:
			merged[info.fqn] = info
		return Classpath(merged.values())

	# Type construction -------------------------------------------------

	def type_of(self, fqn: str) -> ClassType:
		"""
		ClassType for `fqn` with its supertype chain resolved.

		Unknown names produce a shallow ClassType (no supertypes): nominal
		matching still works, assignability is reflexive only.
		"""
		cached = self._types.get(fqn)
		if cached is not None:
			return cached
		return self._build(fqn, set())

	def _build(self, fqn: str, visiting: set[str]) -> ClassType:
		cached = self._types.get(fqn)
		if cached is not None:
			return cached
		info = self._infos.get(fqn)
		if info is None or fqn in visiting:
			return ClassType(fqn)
		visiting.add(fqn)
		supertype = None
		if info.supertype and info.supertype != fqn:
			supertype = self._build(info.supertype, visiting)
		interfaces = tuple(self._build(i, visiting) for i in info.interfaces)
		visiting.discard(fqn)
		ty = ClassType(fqn, supertype=supertype, interfaces=interfaces, kind=info.kind)
		self._types[fqn] = ty
		return ty

	def resolve_type_name(self, name: Optional[str]) -> Optional[JavaType]:
		"""Stub-level type name (`int`, `java.lang.String`, `byte[]`) to a JavaType."""
		if not name:
			return None
		if name.endswith("[]"):
			return ArrayType(self.resolve_type_name(name[:-2]))
		if name in PRIMITIVES:
			return PrimitiveType(name)
		return self.type_of(name)

	# Member lookup -----------------------------------------------------

	def _method_type(self, owner: ClassType, m: MethodInfo, name: str) -> MethodType:
		return MethodType(
			declaring_type=owner,
			name=name,
			return_type=owner if name == CONSTRUCTOR_NAME else self.resolve_type_name(m.returns),
			parameter_types=tuple(self.resolve_type_name(p) for p in m.params),
			thrown_exceptions=tuple(self.type_of(t) for t in m.throws),
		)

	def find_method(self, owner: Optional[JavaType], name: str, arity: int) -> Optional[MethodType]:
		"""
		First method named `name` taking `arity` arguments, searching `owner`
		then its supertypes and interfaces. The declaring type of the result is
		the class that declares the method.
		"""
		if not isinstance(owner, ClassType):
			return None
		for ancestor in self.type_of(owner.fqn).ancestors():
			info = self._infos.get(ancestor.fqn)
			if info is None:
				continue
			for m in info.methods:
				if m.name == name and len(m.params) == arity:
					return self._method_type(ancestor, m, name)
		return None

	def find_constructor(self, owner: Optional[JavaType], arity: int) -> Optional[MethodType]:
		"""Constructor with `arity` parameters; a class with none declared has an implicit no-arg one."""
		if not isinstance(owner, ClassType):
			return None
		full = self.type_of(owner.fqn)
		info = self._infos.get(full.fqn)
		if info is None:
			return None
		for c in info.constructors:
			if len(c.params) == arity:
				return self._method_type(full, c, CONSTRUCTOR_NAME)
		if not info.constructors and arity == 0:
			return MethodType(declaring_type=full, name=CONSTRUCTOR_NAME, return_type=full)
		return None


# Loading -------------------------------------------------------------------

def _str_tuple(value: Any, what: str, path: Optional[str]) -> Tuple[str, ...]:
	if value is None:
		return ()
	if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
		raise JMigrateError(reason_code="bad-classpath", message=f"{what} must be a list of strings", path=path)
	return tuple(value)


def _method_info(raw: Any, path: Optional[str], ctor: bool) -> MethodInfo:
	if not isinstance(raw, Mapping):
		raise JMigrateError(reason_code="bad-classpath", message="method entries must be objects", path=path)
	name = CONSTRUCTOR_NAME if ctor else raw.get("name")
	if not isinstance(name, str) or not name:
		raise JMigrateError(reason_code="bad-classpath", message="method entry without a name", path=path)
	returns = raw.get("returns")
	if returns is not None and not isinstance(returns, str):
		raise JMigrateError(reason_code="bad-classpath", message=f"method {name}: returns must be a string", path=path)
	return MethodInfo(
		name=name,
		params=_str_tuple(raw.get("params"), f"method {name}: params", path),
		returns=returns,
		throws=_str_tuple(raw.get("throws"), f"method {name}: throws", path),
	)


def class_infos_from_json(data: Any, path: Optional[str] = None) -> list[ClassInfo]:
	"""Validate and convert a decoded stub document into ClassInfo entries."""
	if not isinstance(data, Mapping) or not isinstance(data.get("classes"), list):
		raise JMigrateError(reason_code="bad-classpath", message='expected an object with a "classes" list', path=path)
	out: list[ClassInfo] = []
	for raw in data["classes"]:
		if not isinstance(raw, Mapping) or not isinstance(raw.get("name"), str):
			raise JMigrateError(reason_code="bad-classpath", message="class entries need a string name", path=path)
		fqn = raw["name"]
		kind = raw.get("kind", "class")
		if kind not in ("class", "interface"):
			raise JMigrateError(reason_code="bad-classpath", message=f"{fqn}: unknown kind {kind!r}", path=path)
		default_super = None if kind == "interface" or fqn == OBJECT else OBJECT
		supertype = raw.get("super", default_super)
		if supertype is not None and not isinstance(supertype, str):
			raise JMigrateError(reason_code="bad-classpath", message=f"{fqn}: super must be a string", path=path)
		out.append(
			ClassInfo(
				fqn=fqn,
				kind=kind,
				supertype=supertype,
				interfaces=_str_tuple(raw.get("interfaces"), f"{fqn}: interfaces", path),
				methods=tuple(_method_info(m, path, ctor=False) for m in raw.get("methods", [])),
				constructors=tuple(_method_info(c, path, ctor=True) for c in raw.get("constructors", [])),
			)
		)
	return out


def load_stub_file(path: Path) -> list[ClassInfo]:
	try:
		text = Path(path).read_text(encoding="utf-8")
	except OSError as exc:
		raise JMigrateError(reason_code="bad-classpath", message=f"cannot read stub file: {exc}", path=str(path)) from exc
	try:
		data = json.loads(text)
	except json.JSONDecodeError as exc:
		raise JMigrateError(reason_code="bad-classpath", message=f"invalid JSON: {exc}", path=str(path)) from exc
	return class_infos_from_json(data, str(path))


def builtin_classpath() -> Classpath:
	"""Classpath seeded with the shipped JDK and Jackson stubs."""
	return Classpath(load_stub_file(_BUILTIN_STUBS))


def load_classpath(extra_stub_files: Iterable[Path] = ()) -> Classpath:
	infos = load_stub_file(_BUILTIN_STUBS)
	for path in extra_stub_files:
		infos.extend(load_stub_file(path))
	return Classpath(infos)


__all__ = [
	"MethodInfo",
	"ClassInfo",
	"Classpath",
	"PRIMITIVES",
	"class_infos_from_json",
	"load_stub_file",
	"builtin_classpath",
	"load_classpath",
]
