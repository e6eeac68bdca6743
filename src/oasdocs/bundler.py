"""Bundler adapter: resolve every ``$ref`` into one self-contained document.

Reference lookup is done by :mod:`jsonref`.  Referenced files are loaded
with PyYAML, which also parses JSON, so a YAML root may pull in JSON
fragments and vice versa.

Acyclic references are inlined.  A reference back to a node that is
already being inlined stays a ``$ref``, rewritten to point inside the
bundled document: at the node's own location when it lives in the root
file, otherwise at a copy placed under ``components`` (``definitions``
for Swagger 2.0).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import urldefrag, urlsplit
from urllib.request import url2pathname

import jsonref
import yaml

from oasdocs.errors import BundleError
from oasdocs.types import DEFAULT_INDENT
from oasdocs.validator import format_location

logger = logging.getLogger(__name__)


def load_document(uri: str) -> Any:
    """jsonref loader: parse ``file://`` URIs as YAML, defer anything else."""
    parts = urlsplit(uri)
    if parts.scheme != "file":
        return jsonref.jsonloader(uri)

    path = Path(url2pathname(parts.path))
    logger.debug("Loading %s", path)
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f)


def _is_ref(node: Any) -> bool:
    # type() is not proxied, so this never triggers loading the target
    return type(node) is jsonref.JsonRef


def _deref(node: Any) -> Any:
    """Follow a chain of references to the first non-reference value."""
    seen = set()
    while _is_ref(node):
        if id(node) in seen:
            raise BundleError(f"Reference loop at {node.__reference__['$ref']}")
        seen.add(id(node))
        node = node.__subject__
    return node


def _pointer(path: tuple) -> str:
    return format_location(path) or "#"


def _decode_pointer_token(token: str) -> str:
    # JSON Pointer escaping per RFC 6901
    return token.replace("~1", "/").replace("~0", "~")


class _Inliner:
    """Copies a jsonref proxy tree into plain containers."""

    def __init__(self, root: Any) -> None:
        self.root = root
        self.swagger = isinstance(root, Mapping) and "swagger" in root
        self.root_paths: dict[int, tuple] = {}
        self.root_refs: list[tuple[jsonref.JsonRef, tuple]] = []
        self.hoisted: dict[int, tuple] = {}
        self.pending: list[tuple[Any, tuple]] = []
        self._index(root, ())

    def _index(self, node: Any, path: tuple) -> None:
        """Record where every container of the root file sits, without following refs."""
        if _is_ref(node):
            self.root_refs.append((node, path))
            return
        if isinstance(node, Mapping):
            self.root_paths[id(node)] = path
            for key, value in node.items():
                self._index(value, path + (key,))
        elif isinstance(node, list):
            self.root_paths[id(node)] = path
            for i, value in enumerate(node):
                self._index(value, path + (i,))

    def run(self) -> Any:
        bundled = self._inline(self.root, (), {})
        while self.pending:
            target, path = self.pending.pop(0)
            self._place(bundled, path, self._inline(target, path, {}))
        return bundled

    def _inline(self, node: Any, path: tuple, active: dict[int, tuple]) -> Any:
        if _is_ref(node):
            return self._inline_ref(node, path, active)

        if isinstance(node, Mapping):
            active[id(node)] = path
            try:
                return {k: self._inline(v, path + (k,), active) for k, v in node.items()}
            finally:
                del active[id(node)]

        if isinstance(node, list):
            active[id(node)] = path
            try:
                return [self._inline(v, path + (i,), active) for i, v in enumerate(node)]
            finally:
                del active[id(node)]

        return node

    def _inline_ref(self, ref: jsonref.JsonRef, path: tuple, active: dict[int, tuple]) -> Any:
        reference = ref.__reference__
        extras = {
            k: self._inline(v, path + (k,), active)
            for k, v in reference.items()
            if k != "$ref"
        }

        target = _deref(ref)

        if id(target) in active:
            logger.debug("Keeping circular reference %s", reference["$ref"])
            return {"$ref": self._internal_pointer(target, reference["$ref"]), **extras}

        resolved = self._inline(target, path, active)
        if extras and isinstance(resolved, dict):
            resolved.update(extras)
        return resolved

    def _internal_pointer(self, target: Any, ref: str) -> str:
        key = id(target)
        if key in self.root_paths:
            return _pointer(self.root_paths[key])
        for ref_node, ref_path in self.root_refs:
            if ref_path[:1] not in (("components",), ("definitions",)):
                continue
            if id(_deref(ref_node)) == key:
                return _pointer(ref_path)
        if key not in self.hoisted:
            self.hoisted[key] = self._hoist_path(ref)
            self.pending.append((target, self.hoisted[key]))
        return _pointer(self.hoisted[key])

    def _hoist_path(self, ref: str) -> tuple:
        """Pick a free ``components/<section>/<name>`` slot for an external target."""
        location, fragment = urldefrag(ref)
        tokens = [_decode_pointer_token(t) for t in fragment.split("/")[1:]]
        name = tokens[-1] if tokens else PurePosixPath(urlsplit(location).path).stem

        if self.swagger:
            base: tuple = ("definitions",)
        elif len(tokens) >= 3 and tokens[0] == "components":
            base = ("components", tokens[1])
        else:
            base = ("components", "schemas")

        taken = set(self._keys_at(base))
        taken.update(p[-1] for p in self.hoisted.values() if p[:-1] == base)
        candidate, n = name, 1
        while candidate in taken:
            n += 1
            candidate = f"{name}_{n}"
        return base + (candidate,)

    def _keys_at(self, base: tuple) -> list:
        node = self.root
        for key in (*base, None):
            node = _deref(node)
            if key is None:
                break
            if not isinstance(node, Mapping) or key not in node:
                return []
            node = node[key]
        return list(node) if isinstance(node, Mapping) else []

    @staticmethod
    def _place(bundled: Any, path: tuple, value: Any) -> None:
        node = bundled
        for key in path[:-1]:
            if not isinstance(node, dict):
                raise BundleError(f"Cannot place circular reference target at {_pointer(path)}")
            node = node.setdefault(key, {})
        if not isinstance(node, dict):
            raise BundleError(f"Cannot place circular reference target at {_pointer(path)}")
        node[path[-1]] = value


def bundle(path: Path | str) -> Any:
    """Return the document at *path* with all references inlined.

    Circular references are kept as internal ``#/...`` pointers.  The
    caller is expected to have validated the file first.  Raises
    :class:`BundleError` when a reference cannot be resolved.
    """
    base_uri = Path(path).resolve().as_uri()
    try:
        document = load_document(base_uri)
        proxied = jsonref.replace_refs(document, base_uri=base_uri, loader=load_document)
        bundled = _Inliner(proxied).run()
    except jsonref.JsonRefError as exc:
        raise BundleError(exc.message) from exc
    except (OSError, yaml.YAMLError) as exc:
        raise BundleError(str(exc)) from exc
    except RecursionError as exc:
        raise BundleError("Reference nesting is too deep to inline") from exc

    logger.debug("Bundled %s", base_uri)
    return bundled


def dump_bundle(document: Any, indent: int = DEFAULT_INDENT) -> str:
    """Serialize a bundled document as pretty-printed JSON."""
    return json.dumps(document, indent=indent, ensure_ascii=False, default=str) + "\n"
