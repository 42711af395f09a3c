"""Front-matter header parsing and rendering.

A lesson document starts with a YAML header delimited by ``---`` lines::

    ---
    layout: tour
    title: Classes
    ---

The header is flattened into a ``str -> str`` mapping. Scalars are
coerced to strings (numbers keep their source spelling), sequences of
scalars are joined with ``", "`` and nested mappings are rejected. Both
``---`` delimiters must start at column 0.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from ruamel.yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from lessonctl.domain.errors import MalformedDocument

FRONT_MATTER_DELIMITER = "---"

# Keys emitted first by render_front_matter(); the rest follow alphabetically.
CANONICAL_KEY_ORDER: list[str] = ["layout", "title"]


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful; a failed dump can leave a shared
    instance unusable, so every call gets its own.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    return y


def _coerce_value(doc_id: str, key: str, value: Any, node: Node | None, line: int) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Mapping):
        msg = f"Front-matter key {key!r} must be a scalar, not a mapping"
        raise MalformedDocument(doc_id, msg, line=line)
    if isinstance(value, list):
        item_nodes: list[Node | None] = (
            list(node.value) if isinstance(node, SequenceNode) else [None] * len(value)
        )
        return ", ".join(
            _coerce_value(doc_id, key, item, item_node, line)
            for item, item_node in zip(value, item_nodes, strict=True)
        )
    # Numbers keep their source spelling: ``2.10`` stays "2.10", ``0x1F`` stays "0x1F".
    if isinstance(value, int | float) and isinstance(node, ScalarNode):
        return str(node.value)
    return str(value)


def _value_nodes(yaml_block: str) -> dict[str, Node]:
    """Map each top-level key to the YAML node of its value."""
    root = _new_yaml().compose(yaml_block)
    if not isinstance(root, MappingNode):
        return {}
    return {
        str(key_node.value): value_node
        for key_node, value_node in root.value
        if isinstance(key_node, ScalarNode)
    }


def split_front_matter(text: str, doc_id: str) -> tuple[dict[str, str], list[str], int]:
    """Split *text* into ``(front_matter, body_lines, body_start_line)``.

    ``body_start_line`` is the 1-based source line of ``body_lines[0]``.
    Line endings are normalised to ``\\n`` first.

    Raises:
        MalformedDocument: header missing, unterminated, not a mapping,
            or not valid YAML.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    if not lines or lines[0].rstrip() != FRONT_MATTER_DELIMITER:
        raise MalformedDocument(doc_id, "Missing front-matter header", line=1)

    # Delimiters sit at column 0; an indented ``---`` belongs to a block scalar.
    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.rstrip() == FRONT_MATTER_DELIMITER:
            end_idx = i
            break
    if end_idx is None:
        raise MalformedDocument(doc_id, "Unterminated front-matter header", line=1)

    yaml_block = "".join(f"{line}\n" for line in lines[1:end_idx])
    try:
        raw = _new_yaml().load(yaml_block)
    except YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = mark.line + 2 if mark is not None else 1
        problem = getattr(exc, "problem", None) or str(exc)
        raise MalformedDocument(doc_id, f"Invalid front-matter YAML: {problem}", line=line) from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise MalformedDocument(doc_id, "Front-matter header must be a mapping", line=2)

    nodes = _value_nodes(yaml_block)
    front_matter: dict[str, str] = {}
    for offset, (key, value) in enumerate(raw.items()):
        key_line = _key_line(raw, key, default=2 + offset)
        name = str(key)
        front_matter[name] = _coerce_value(doc_id, name, value, nodes.get(name), key_line)

    return front_matter, lines[end_idx + 1 :], end_idx + 2


def _key_line(raw: Any, key: Any, *, default: int) -> int:
    """Best-effort source line of *key* using ruamel's position info."""
    lc = getattr(raw, "lc", None)
    if lc is None:
        return default
    try:
        return int(lc.key(key)[0]) + 2
    except (KeyError, TypeError):
        return default


def parse_front_matter(text: str, doc_id: str = "<string>") -> dict[str, str]:
    """Parse only the front-matter header of *text*."""
    front_matter, _body, _start = split_front_matter(text, doc_id)
    return front_matter


def order_front_matter(front_matter: Mapping[str, str]) -> dict[str, str]:
    """Return *front_matter* with :data:`CANONICAL_KEY_ORDER` keys first."""
    ordered: dict[str, str] = {}
    for key in CANONICAL_KEY_ORDER:
        if key in front_matter:
            ordered[key] = front_matter[key]
    for key in sorted(front_matter):
        if key not in ordered:
            ordered[key] = front_matter[key]
    return ordered


def render_front_matter(front_matter: Mapping[str, str]) -> str:
    """Render a ``str -> str`` mapping as a ``---`` delimited YAML header.

    Parsing the result with :func:`parse_front_matter` recovers exactly the
    same key/value pairs.
    """
    buf = StringIO()
    ordered = {str(k): str(v) for k, v in order_front_matter(front_matter).items()}
    if ordered:
        _new_yaml().dump(ordered, buf)
    return f"{FRONT_MATTER_DELIMITER}\n{buf.getvalue()}{FRONT_MATTER_DELIMITER}\n"
