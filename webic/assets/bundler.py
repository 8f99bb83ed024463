"""CommonJS bundling for the script entry point.

Starting from ``app/js/index.js``, every relative ``require('./module')`` is
resolved, read and wrapped in a function so the whole module graph ships as
one browser script. Requires are found by parsing each module, so calls
inside comments and string literals are ignored. Package imports
(``require('lodash')``) are not resolved: the template's scripts only use
relative modules.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

import esprima
from esprima.error_handler import Error as ParseError

from webic.errors import BundleError

_PRELUDE = """(function (modules, entry) {
  var cache = {};
  function load(id) {
    if (cache[id]) {
      return cache[id].exports;
    }
    var module = (cache[id] = { exports: {} });
    var definition = modules[id];
    definition[0].call(
      module.exports,
      function (request) {
        return load(definition[1][request]);
      },
      module,
      module.exports
    );
    return module.exports;
  }
  load(entry);
})({
"""


@dataclass
class Module:
    """One source file in the bundle."""

    id: int
    path: Path
    source: str
    requests: list[str] = field(default_factory=list)
    dependencies: dict[str, int] = field(default_factory=dict)


def find_requires(source: str, path: Path | None = None) -> list[str]:
    """Return the string arguments of ``require(...)`` calls in *source*.

    Requests are returned in source order, duplicates included.

    Raises:
        BundleError: If *source* is not valid JavaScript.
    """
    found: list[tuple[int, str]] = []

    def _visit(node, metadata) -> None:
        if node.type != "CallExpression":
            return
        callee = node.callee
        if callee.type != "Identifier" or callee.name != "require" or len(node.arguments) != 1:
            return
        argument = node.arguments[0]
        if argument.type == "Literal" and isinstance(argument.value, str):
            found.append((node.range[0], argument.value))

    try:
        esprima.parseScript(source, {"range": True}, _visit)
    except ParseError as exc:
        raise BundleError(f"Cannot parse {path or 'script'}: {exc}") from exc
    return [request for _, request in sorted(found)]


def resolve(request: str, importer: Path) -> Path:
    """Resolve a relative *request* made from *importer* to a file.

    Tries the path as given, then with ``.js``, then ``<dir>/index.js``.

    Raises:
        BundleError: For package imports and for paths that do not exist.
    """
    if not request.startswith(("./", "../")):
        raise BundleError(f"Cannot bundle package import '{request}' in {importer}")

    base = (importer.parent / request).resolve()
    for candidate in (base, base.with_name(base.name + ".js"), base / "index.js"):
        if candidate.is_file():
            return candidate
    raise BundleError(f"Cannot find module '{request}' from {importer}")


def collect_modules(entry: str | Path) -> list[Module]:
    """Return the module graph reachable from *entry*, entry first."""
    entry_path = Path(entry).resolve()
    if not entry_path.is_file():
        raise BundleError(f"Script entry point not found: {entry_path}")

    modules: dict[Path, Module] = {}
    pending = [entry_path]
    while pending:
        path = pending.pop(0)
        if path in modules:
            continue
        source = path.read_text(encoding="utf-8")
        module = Module(id=len(modules), path=path, source=source, requests=find_requires(source, path))
        modules[path] = module
        pending.extend(resolve(request, path) for request in module.requests)

    # Ids are only known once every module is discovered.
    for module in modules.values():
        for request in module.requests:
            module.dependencies[request] = modules[resolve(request, module.path)].id
    return list(modules.values())


def bundle(entry: str | Path) -> str:
    """Bundle *entry* and its relative dependencies into one script."""
    parts = [_PRELUDE]
    for module in collect_modules(entry):
        parts.append(
            f"{module.id}: [function (require, module, exports) {{\n"
            f"{module.source.rstrip()}\n"
            f"}}, {json.dumps(module.dependencies, sort_keys=True)}],\n"
        )
    parts.append("}, 0);\n")
    return "".join(parts)
