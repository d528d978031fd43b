"""Commands: validate field lists and list a type's properties."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from propcheck.commands._base import PropcheckCommand

if TYPE_CHECKING:
    from propcheck.commands._context import AppContext


@click.command(
    cls=PropcheckCommand,
    examples="""\
  propcheck check app.models:MatterDto "name,description"
  propcheck check app.models:MatterDto "owner.email, created"
  propcheck --json check app.models:DocumentDto fileName,revisions.number""",
)
@click.argument("target")
@click.argument("fields", required=False, default=None)
@click.pass_obj
def check(app: AppContext, target: str, fields: str | None) -> None:
    """Validate a comma-separated FIELDS list against TARGET (module:Class)."""
    tp = app.resolve(target, "validate_fields")
    app.emit(app.validator.validate_fields(tp, fields))


@click.command(
    cls=PropcheckCommand,
    examples="""\
  propcheck props app.models:MatterDto
  propcheck -q props app.models:MatterDto""",
)
@click.argument("target")
@click.pass_obj
def props(app: AppContext, target: str) -> None:
    """List the readable properties of TARGET (module:Class)."""
    tp = app.resolve(target, "describe")
    app.emit(app.validator.describe(tp))
