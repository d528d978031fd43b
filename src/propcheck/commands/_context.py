"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy service construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from propcheck.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from propcheck.config.settings import PropcheckSettings
    from propcheck.services.properties import PropertyValidationService
    from propcheck.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: PropcheckSettings) -> None:
        self.settings = settings
        self._validator: PropertyValidationService | None = None

        from propcheck.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            level=settings.logging.level,
        )

    @property
    def validator(self) -> PropertyValidationService:
        """The validation service (created lazily on first access)."""
        if self._validator is None:
            from propcheck.services.properties import PropertyValidationService

            self._validator = PropertyValidationService(
                cache_results=self.settings.cache.validation_results
            )
        return self._validator

    def resolve(self, target: str, op: str) -> Any:
        """Import *target*, emitting a ``target_not_found`` error on failure."""
        from propcheck.commands._target import import_target
        from propcheck.domain.errors import TargetImportError
        from propcheck.services.result import ServiceResult

        try:
            return import_target(target)
        except TargetImportError as exc:
            self.emit(ServiceResult.failure(op, "target_not_found", str(exc)))

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
