# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from jmigrate.classpath import load_classpath
from jmigrate.config import RuleOptions, load_rule_options
from jmigrate.errors import JMigrateError
from jmigrate.parser import parse_compilation_unit
from jmigrate.recipe import RecipeResult, get_recipe, recipe_names
from jmigrate.rules.jackson import RECIPE_NAME


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="jmigrate", description="Source-to-source migrations for Java code")
	sub = p.add_subparsers(dest="cmd", required=True)

	run = sub.add_parser("run", help="Apply a recipe to Java source files")
	run.add_argument("files", nargs="+", type=Path, help="Java source files to rewrite")
	run.add_argument("--recipe", type=str, default=RECIPE_NAME, help=f"Recipe name (default: {RECIPE_NAME})")
	run.add_argument("--config", type=Path, default=None, help="JSON rule options (legacy/replacement types, API patterns)")
	run.add_argument(
		"--classpath",
		type=Path,
		action="append",
		default=[],
		help="Extra JSON class stub file; may be given more than once",
	)
	run.add_argument("--write", action="store_true", help="Rewrite changed files in place instead of printing them")
	run.add_argument("--json", action="store_true", help="Emit a machine-readable JSON report")

	lst = sub.add_parser("list", help="List available recipes")
	lst.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
	return p


def _read_source(path: Path) -> str:
	try:
		return path.read_text(encoding="utf-8")
	except OSError as exc:
		raise JMigrateError(reason_code="io-error", message=f"cannot read source: {exc}", path=str(path)) from exc


def _write_source(path: Path, text: str) -> None:
	try:
		path.write_text(text, encoding="utf-8")
	except OSError as exc:
		raise JMigrateError(reason_code="io-error", message=f"cannot write source: {exc}", path=str(path)) from exc


def _run(args: argparse.Namespace) -> list[RecipeResult]:
	options = load_rule_options(args.config) if args.config is not None else RuleOptions()
	classpath = load_classpath(args.classpath)
	recipe = get_recipe(args.recipe, options, classpath)
	results: list[RecipeResult] = []
	for path in args.files:
		cu = parse_compilation_unit(_read_source(path), classpath=classpath, path=str(path))
		results.append(recipe.run(cu))
	# nothing is written until every file has parsed and run
	if args.write:
		for path, result in zip(args.files, results):
			if result.changed:
				_write_source(path, result.source())
	return results


def main(argv: list[str] | None = None) -> int:
	p = _build_parser()
	args = p.parse_args(argv)

	if args.cmd == "list":
		recipes = [get_recipe(name).describe() for name in recipe_names()]
		if args.json:
			print(json.dumps({"recipes": recipes}, sort_keys=True, separators=(",", ":")))
		else:
			for r in recipes:
				print(f"{r['name']}: {r['display_name']}")
		return 0

	if args.cmd == "run":
		try:
			results = _run(args)
		except JMigrateError as err:
			if args.json:
				print(json.dumps({"ok": False, "error": err.to_dict()}, sort_keys=True, separators=(",", ":")))
			else:
				print(err.format_human(), file=sys.stderr)
			return 1
		if args.json:
			report = {"ok": True, "recipe": args.recipe, "files": [r.to_dict() for r in results]}
			print(json.dumps(report, sort_keys=True, separators=(",", ":")))
			return 0
		for result in results:
			if not args.write:
				sys.stdout.write(result.source())
			for diag in result.diagnostics:
				print(f"{result.after.source_path}: {diag.format_human()}", file=sys.stderr)
		return 0

	raise AssertionError("unreachable")


if __name__ == "__main__":
	sys.exit(main())
