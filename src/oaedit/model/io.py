"""Reading and writing document trees.

read_node/write_node convert between plain mappings (as produced by a YAML or
JSON parser) and the node tree. File helpers use PyYAML, which also reads
JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from oaedit.model.nodes import Document, Node, attr_name, is_extension


def read_document(data: Any) -> Document:
    """Build a Document from a parsed mapping."""
    if not isinstance(data, dict):
        raise ValueError("Document content must be a mapping")
    version = data.get("openapi")
    if not isinstance(version, str) or not version.startswith("3."):
        if "swagger" in data:
            raise ValueError("Swagger 2.0 documents are not supported")
        raise ValueError("Not an OpenAPI 3.x document (missing 'openapi' version)")
    doc = Document()
    read_node(data, doc)
    return doc


def read_node(data: dict[str, Any], node: Node) -> Node:
    """Populate `node` from `data`. Existing content is not cleared."""
    for key, value in data.items():
        # YAML reads status codes as ints
        key = str(key)
        if is_extension(key):
            node.extensions[key] = value
        elif key in node.PROPERTIES:
            setattr(node, attr_name(key), value)
        elif key in node.CHILDREN and isinstance(value, dict):
            child = node.create_child(key)
            read_node(value, child)
            node.set_child(key, child)
        elif key in node.MAPS and isinstance(value, dict):
            node.get_map(key, create=True)
            for name, item_data in value.items():
                item = node.create_node(node.MAPS[key])
                read_node(item_data or {}, item)
                node.insert_map_item(key, str(name), item)
        elif key in node.LISTS and isinstance(value, list):
            items = node.get_list(key, create=True)
            for item_data in value:
                item = node.create_node(node.LISTS[key])
                read_node(item_data or {}, item)
                items.append(item)
        elif node.ITEMS is not None and isinstance(value, dict):
            item = node.create_item()
            read_node(value, item)
            node.insert_item(key, item)
        else:
            node.unknown[key] = value
    return node


def write_node(node: Node) -> dict[str, Any]:
    """Serialize `node` (and its subtree) to a plain mapping."""
    out: dict[str, Any] = {}
    for name in node.PROPERTIES:
        value = getattr(node, attr_name(name))
        if value is not None:
            out[name] = value
    for name in node.CHILDREN:
        child = getattr(node, attr_name(name))
        if child is not None:
            out[name] = write_node(child)
    for name in node.MAPS:
        entries = getattr(node, attr_name(name))
        if entries is not None:
            out[name] = {key: write_node(item) for key, item in entries.items()}
    for name in node.LISTS:
        items = getattr(node, attr_name(name))
        if items is not None:
            out[name] = [write_node(item) for item in items]
    for key, item in node.entries.items():
        out[key] = write_node(item)
    out.update(node.unknown)
    out.update(node.extensions)
    return out


def load_document_file(path: Path) -> Document:
    with path.open() as f:
        data = yaml.safe_load(f)
    return read_document(data)


def dump_document_file(doc: Document, path: Path) -> None:
    data = write_node(doc)
    if path.suffix == ".json":
        path.write_text(json.dumps(data, indent=2) + "\n")
        return
    with path.open("w") as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
