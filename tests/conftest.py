"""Shared fixtures: small OpenAPI documents written into a temp docs/ dir."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


VALID_API = """\
openapi: 3.0.3
info:
  title: Pet Store
  version: 1.0.0
paths:
  /pets:
    get:
      operationId: listPets
      responses:
        "200":
          description: A list of pets
          content:
            application/json:
              schema:
                $ref: "./components.yml#/components/schemas/PetList"
  /pets/{petId}:
    get:
      operationId: getPet
      parameters:
        - name: petId
          in: path
          required: true
          schema:
            type: string
      responses:
        "200":
          description: A single pet
          content:
            application/json:
              schema:
                $ref: "./components.yml#/components/schemas/Pet"
"""

COMPONENTS = """\
components:
  schemas:
    Pet:
      type: object
      required: [name]
      properties:
        name:
          type: string
        tag:
          type: string
    PetList:
      type: array
      items:
        $ref: "#/components/schemas/Pet"
"""

MISSING_RESPONSES = """\
openapi: 3.0.3
info:
  title: Broken
  version: 1.0.0
paths:
  /pets:
    get:
      operationId: listPets
"""

TWO_MISSING_RESPONSES = """\
openapi: 3.0.3
info:
  title: Broken
  version: 1.0.0
paths:
  /pets:
    get:
      operationId: listPets
  /owners:
    get:
      operationId: listOwners
"""

CIRCULAR = """\
openapi: 3.0.3
info:
  title: Tree
  version: 1.0.0
paths: {}
components:
  schemas:
    Node:
      type: object
      properties:
        child:
          $ref: "#/components/schemas/Node"
"""

TREE_API = """\
openapi: 3.0.3
info:
  title: Forest
  version: 1.0.0
paths:
  /tree:
    get:
      operationId: getTree
      responses:
        "200":
          description: The whole tree
          content:
            application/json:
              schema:
                $ref: "./tree.yml#/components/schemas/Node"
"""

TREE_COMPONENTS = """\
components:
  schemas:
    Node:
      type: object
      properties:
        name:
          type: string
        children:
          type: array
          items:
            $ref: "#/components/schemas/Node"
"""


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


@pytest.fixture()
def docs_dir(tmp_path: Path) -> Path:
    return tmp_path / "docs"


@pytest.fixture()
def valid_spec(docs_dir: Path) -> Path:
    """Two-file spec: api.yml references components.yml."""
    write(docs_dir / "components.yml", COMPONENTS)
    return write(docs_dir / "api.yml", VALID_API)


@pytest.fixture()
def invalid_spec(docs_dir: Path) -> Path:
    """Operation without the required ``responses`` field."""
    return write(docs_dir / "broken.yml", MISSING_RESPONSES)


@pytest.fixture()
def two_error_spec(docs_dir: Path) -> Path:
    return write(docs_dir / "broken2.yml", TWO_MISSING_RESPONSES)


@pytest.fixture()
def circular_spec(docs_dir: Path) -> Path:
    return write(docs_dir / "tree.yml", CIRCULAR)


@pytest.fixture()
def recursive_spec(docs_dir: Path) -> Path:
    """Two-file spec: api.yml uses a self-referencing Node from tree.yml."""
    write(docs_dir / "tree.yml", TREE_COMPONENTS)
    return write(docs_dir / "api.yml", TREE_API)


def collect_refs(node) -> list[str]:
    """Return every ``$ref`` value anywhere in a JSON tree."""
    if isinstance(node, dict):
        refs = [node["$ref"]] if "$ref" in node else []
        for value in node.values():
            refs.extend(collect_refs(value))
        return refs
    if isinstance(node, list):
        return [ref for item in node for ref in collect_refs(item)]
    return []


@pytest.fixture()
def find_refs():
    """The :func:`collect_refs` helper, for tests in subdirectories."""
    return collect_refs
