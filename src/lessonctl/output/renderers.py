"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers
are dispatched by ``result.op`` in :func:`render_result`; unknown ops
fall through to a generic key-value renderer. Failed results that still
carry a report (``check``, ``render_all``) render the report first and
the error line last.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from lessonctl.output.console import create_console, get_output, style_for_block

if TYPE_CHECKING:
    from rich.console import Console

    from lessonctl.services.result import ServiceResult

Renderer = Callable[..., None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    renderer = _OP_RENDERERS.get(result.op, _render_generic)

    if result.ok:
        renderer(result, console, verbose=verbose)
    else:
        if result.data and result.op in _REPORT_OPS:
            renderer(result, console, verbose=verbose)
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items") or result.data.get("rendered")
    if items and isinstance(items, list):
        return "\n".join(str(i["id"]) for i in items if isinstance(i, dict) and "id" in i)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────

_FIELD_STYLES = {
    "id": "lesson.id",
    "title": "lesson.title",
    "path": "lesson.path",
    "output_dir": "lesson.path",
    "root": "lesson.path",
}


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "lesson.ok"), (f"  {result.op}", "lesson.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print one indented ``key: value`` line."""
    console.print(
        Text.assemble((f"  {key}: ", "lesson.key"), (str(value), _FIELD_STYLES.get(key, "")))
    )


def _span_label(span: dict[str, Any]) -> Text:
    duration = float(span.get("duration_ms", 0.0))
    label = Text.assemble(
        (f"{duration:.2f}ms", "yellow" if duration > 100 else "dim"),
        f"  {span.get('name', '?')}",
    )
    extras = {**span.get("annotations", {}), **span.get("counters", {})}
    if extras:
        label.append("  " + " ".join(f"{k}={v}" for k, v in extras.items()), style="dim")
    return label


def _span_tree(span: dict[str, Any], tree: Tree | None = None) -> Tree:
    node = Tree(_span_label(span)) if tree is None else tree.add(_span_label(span))
    for child in span.get("children", []):
        _span_tree(child, node)
    return node


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Telemetry tree and other meta entries (verbose only)."""
    if not result.meta:
        return
    console.print()
    for key, value in result.meta.items():
        if key == "telemetry" and isinstance(value, dict):
            console.print(_span_tree(value))
        else:
            console.print(Text(f"  {key}: {value}", style="dim"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    console.print(
        Text.assemble(
            ("ERROR", "lesson.error"),
            (f"  {result.op}", "lesson.op"),
            f" — {err.message if err else 'Unknown error'}",
        )
    )
    if verbose and err and err.detail:
        for key, value in err.detail.items():
            console.print(Text(f"  {key}: {value}", style="dim"))


# ── Check ─────────────────────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render violations grouped by document."""
    issues = result.data.get("issues", [])
    documents = result.data.get("documents", 0)

    if not issues:
        console.print(f"[lesson.ok]OK[/lesson.ok]  No issues found in {documents} document(s).")
        if verbose:
            _render_meta(console, result)
        return

    severity_styles = {"error": "lesson.error", "warning": "lesson.warning"}
    by_document: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_document.setdefault(str(issue.get("doc_id", "?")), []).append(issue)

    for doc_id, doc_issues in by_document.items():
        console.print(f"\n[lesson.id]{escape(doc_id)}[/lesson.id]")
        for issue in doc_issues:
            sev = str(issue.get("severity", "warning"))
            style = severity_styles.get(sev, "")
            line = issue.get("line")
            where = f"{line}: " if line else ""
            console.print(
                f"  {where}[{style}]{sev}[/{style}] {escape(str(issue.get('message', '')))}"
                f" [dim]({issue.get('code', '')})[/dim]"
            )

    errors = result.data.get("errors", 0)
    warnings = result.data.get("warnings", 0)
    console.print(f"\n{errors} error(s), {warnings} warning(s) in {documents} document(s)")
    if verbose:
        _render_meta(console, result)


# ── Documents ─────────────────────────────────────────────────────────


def _render_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    for item in items:
        console.print(Text(str(item.get("id", "")), style="lesson.id"))
    console.print(f"\n{result.data.get('count', len(items))} documents")
    if verbose:
        _field(console, "root", result.data.get("root", ""))
        _render_meta(console, result)


def _render_show(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a parsed document: front-matter fields then a block table."""
    d = result.data
    _status_line(console, result)
    _field(console, "id", d.get("id", ""))
    for key, value in d.get("front_matter", {}).items():
        _field(console, key, value)

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind")
    table.add_column("Line", justify="right")
    table.add_column("Language")
    table.add_column("Size", justify="right")
    for index, block in enumerate(d.get("blocks", []), start=1):
        kind = str(block.get("kind", ""))
        size = f"{block['lines']} lines" if kind == "fenced" else f"{block.get('chars', 0)} chars"
        table.add_row(
            str(index),
            Text(kind, style=style_for_block(kind)),
            str(block.get("line", "")),
            str(block.get("language", "")),
            size,
        )
    console.print()
    console.print(table)
    console.print(f"\n{d.get('block_count', 0)} blocks")
    if verbose:
        _render_meta(console, result)


# ── Render ────────────────────────────────────────────────────────────


def _render_render(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("id", "title", "path", "block_count"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_render_all(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    if result.ok:
        _status_line(console, result)
    _field(console, "output_dir", result.data.get("output_dir", ""))
    _field(console, "rendered", result.data.get("count", 0))
    if verbose:
        for item in result.data.get("rendered", []):
            path = escape(str(item["path"]))
            console.print(f"  - [lesson.id]{escape(item['id'])}[/lesson.id] → {path}")
    for failure in result.data.get("failures", []):
        reason = escape(str(failure.get("error", "")))
        console.print(f"  [lesson.error]failed[/lesson.error] {escape(failure['id'])}: {reason}")
    if verbose:
        _render_meta(console, result)


# ── Generic ───────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "check": _render_check,
    "list_documents": _render_list,
    "show": _render_show,
    "render": _render_render,
    "render_all": _render_render_all,
}

# Ops whose failed results still carry a report worth printing.
_REPORT_OPS = frozenset({"check", "render_all"})
