"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from propcheck.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from propcheck.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    properties = result.data.get("properties")
    if isinstance(properties, list):
        return "\n".join(str(p.get("name", "")) for p in properties)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="pc.ok"), Text(f"  {result.op}", style="pc.op"))


def _field(console: Console, key: str, value: Any) -> None:
    if isinstance(value, (dict, list)):
        value = json.dumps(value, separators=(",", ":"), default=str)
    console.print(Text(f"  {key}: ", style="pc.key"), Text(str(value)))


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="pc.error"), Text(f"  {result.op}", style="pc.op"), " — ", msg
    )
    if err is None or not err.detail:
        return

    invalid = err.detail.get("invalid_fields")
    if invalid:
        console.print(
            Text("  invalid: ", style="pc.key"), Text(", ".join(invalid), style="pc.invalid")
        )
    available = err.detail.get("available_properties")
    if available is not None:
        console.print(Text("  available: ", style="pc.key"), Text(", ".join(available)))
    if verbose:
        for k, v in err.detail.items():
            if k not in ("invalid_fields", "available_properties"):
                _field(console, k, v)


def _render_describe(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "type", result.data.get("type", ""))
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Property", style="pc.name")
    table.add_column("Type", style="pc.type")
    for prop in result.data.get("properties", []):
        table.add_row(prop["name"], prop["type"])
    console.print(table)


def _render_validate(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "type", result.data.get("type", ""))
    fields = result.data.get("fields") or "(all)"
    _field(console, "fields", fields)


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "describe": _render_describe,
    "validate_fields": _render_validate,
}
