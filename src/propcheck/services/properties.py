"""PropertyValidationService — validate ``fields=`` lists against a type.

Facade over the two caches and the path resolver. The request layer hands
over the raw ``fields`` query parameter; the service answers whether every
comma-separated entry names a readable attribute (``address.street`` style
paths included) before any projection is built from it.

INVARIANT: Validation fails closed. An unexpected error while checking a
field list is logged and reported as invalid, never accepted silently.
Only contract violations (a missing single property name) raise.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from propcheck.domain.errors import PropertyNameError
from propcheck.domain.schema import cache_key, type_identity
from propcheck.services.contracts import DiagnosticInfo, dump_validated
from propcheck.services.paths import PathResolver
from propcheck.services.result import ServiceResult
from propcheck.services.result_cache import ValidationResultCache
from propcheck.services.schema_cache import Schema, TypeSchemaCache

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ","
SERVICE_NAME = "PropertyValidationService"


def split_fields(fields: str) -> list[str]:
    """Split a raw field list into trimmed, non-empty tokens.

    Duplicates are kept; each occurrence is validated on its own.
    """
    return [token.strip() for token in fields.split(FIELD_SEPARATOR) if token.strip()]


def display_name(tp: Any) -> str:
    """Short human-readable name of *tp* for log and error messages."""
    return getattr(tp, "__name__", None) or repr(tp)


class PropertyValidationService:
    """Validate field lists and single property paths against a type.

    Usage::

        svc = PropertyValidationService()
        if not svc.type_has_properties(MatterDto, request.query_params.get("fields")):
            return bad_request(...)
    """

    def __init__(
        self,
        *,
        schemas: TypeSchemaCache | None = None,
        results: ValidationResultCache | None = None,
        cache_results: bool = True,
    ) -> None:
        self._schemas = schemas if schemas is not None else TypeSchemaCache()
        self._results = (
            results if results is not None else ValidationResultCache(enabled=cache_results)
        )
        self._resolver = PathResolver(self._schemas)
        logger.debug(
            "%s initialized (result cache enabled=%s)", SERVICE_NAME, self._results.enabled
        )

    @property
    def schemas(self) -> TypeSchemaCache:
        return self._schemas

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    # ── Boolean checks ───────────────────────────────────────────────

    def type_has_properties(self, tp: Any, fields: str | None) -> bool:
        """Return True if every entry of *fields* names a readable path on *tp*.

        None, empty, and whitespace-only field lists are always valid and
        touch neither cache. Results are cached under the verbatim *fields*
        string.
        """
        if fields is None or not fields.strip():
            logger.debug(
                "Empty field list for type %s; nothing to validate", display_name(tp)
            )
            return True

        try:
            key = cache_key(tp)
            cached = self._results.get(key, fields)
            if cached is not None:
                logger.debug(
                    "Cached validation result for %s with fields %r: %s",
                    display_name(tp),
                    fields,
                    cached,
                )
                return cached

            root = self._schemas.get_schema(tp)
            invalid = self._invalid_fields(root, fields)
            valid = not invalid
            self._results.put(key, fields, valid)

            if valid:
                logger.debug(
                    "Property validation succeeded for type %s with fields %r",
                    display_name(tp),
                    fields,
                )
            else:
                logger.warning(
                    "Property validation failed for type %s. Invalid fields: %s. "
                    "Available properties: %s",
                    display_name(tp),
                    ", ".join(invalid),
                    ", ".join(p.name for p in root),
                )
            return valid
        except Exception:
            logger.exception(
                "Unexpected error validating fields %r for type %s", fields, display_name(tp)
            )
            return False

    def has_property(self, tp: Any, name: str | None) -> bool:
        """Return True if *name* (optionally dotted) is a readable path on *tp*.

        Raises:
            PropertyNameError: *name* is None, empty, or whitespace.
        """
        if name is None or not name.strip():
            raise PropertyNameError("property name must be a non-empty string")

        try:
            root = self._schemas.get_schema(tp)
            valid = self._resolver.path_exists(root, name.strip())
        except Exception:
            logger.exception(
                "Error validating property %r on type %s", name, display_name(tp)
            )
            return False
        logger.debug("Single property check %s.%s: %s", display_name(tp), name, valid)
        return valid

    def get_available_properties(self, tp: Any) -> list[str]:
        """Property names of *tp* in declaration order; empty on failure."""
        try:
            names = [p.name for p in self._schemas.get_schema(tp)]
        except Exception:
            logger.exception("Error retrieving available properties for %s", display_name(tp))
            return []
        logger.debug("Retrieved %d available properties for %s", len(names), display_name(tp))
        return names

    # ── Structured operations ────────────────────────────────────────

    def validate_fields(self, tp: Any, fields: str | None) -> ServiceResult:
        """Validate *fields* and explain any failure.

        Uses the same cache as :meth:`type_has_properties`. On failure the
        error detail lists the offending entries and the available names.
        """
        op = "validate_fields"
        data = {"type": type_identity(tp), "fields": fields or "", "valid": True}
        if self.type_has_properties(tp, fields):
            return ServiceResult(ok=True, op=op, data=data)

        try:
            root = self._schemas.get_schema(tp)
            invalid = self._invalid_fields(root, fields or "")
        except Exception as exc:
            return ServiceResult.failure(
                op, "validation_error", f"Could not validate fields: {exc}"
            )
        if not invalid:
            # Cached False with no reproducible cause: still fail closed.
            return ServiceResult.failure(
                op, "validation_error", "Field list could not be verified"
            )
        return ServiceResult.failure(
            op,
            "invalid_fields",
            f"Unknown fields for {display_name(tp)}: {', '.join(invalid)}",
            detail={
                "invalid_fields": invalid,
                "available_properties": [p.name for p in root],
            },
        )

    def describe(self, tp: Any) -> ServiceResult:
        """List the schema of *tp* with declared type names."""
        root = self._schemas.get_schema(tp)
        return ServiceResult(
            ok=True,
            op="describe",
            data={
                "type": type_identity(tp),
                "count": len(root),
                "properties": [{"name": p.name, "type": p.type_name} for p in root],
            },
        )

    # ── Diagnostics ──────────────────────────────────────────────────

    def get_diagnostic_info(self) -> dict[str, Any]:
        """Cache counters and a health indicator, for operational visibility."""
        try:
            return dump_validated(
                DiagnosticInfo,
                {
                    "service_name": SERVICE_NAME,
                    "service_status": "healthy",
                    "property_cache_count": len(self._schemas),
                    "validation_cache_count": len(self._results),
                    "schema_computations": self._schemas.computations,
                    "cached_types": self._schemas.identities(),
                    "last_update": datetime.now(UTC).isoformat(),
                },
            )
        except Exception as exc:
            logger.exception("Error generating diagnostic information")
            return {
                "service_name": SERVICE_NAME,
                "service_status": "error",
                "error_message": str(exc),
            }

    def clear_cache(self) -> None:
        """Empty both caches. In-flight validations may repopulate them."""
        schema_count = self._schemas.clear()
        result_count = self._results.clear()
        logger.info(
            "Cleared property caches (schemas: %d, validation results: %d)",
            schema_count,
            result_count,
        )

    # ── Internals ────────────────────────────────────────────────────

    def _invalid_fields(self, root: Schema, fields: str) -> list[str]:
        return [
            token for token in split_fields(fields) if not self._resolver.path_exists(root, token)
        ]
