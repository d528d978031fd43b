"""TypeSchemaCache — memoized schemas keyed by the type object.

INVARIANT: ``get_schema`` never raises. An introspection failure is logged
and cached as an empty schema, so every path against that type fails
validation instead of crashing the caller.

Entries are keyed by :func:`~propcheck.domain.schema.cache_key`, not by
the ``module.QualName`` display identity, so two distinct classes with the
same name never share a schema.

Get-or-create uses ``dict.setdefault``, which is atomic for a single key.
Two threads asking for a never-seen type may both introspect it; the
first insert wins and both see the same tuple.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Any

from propcheck.domain.schema import PropertyDescriptor, cache_key, introspect, type_identity

logger = logging.getLogger(__name__)

Schema = tuple[PropertyDescriptor, ...]


class TypeSchemaCache:
    """Per-type cache of publicly readable attribute descriptors."""

    def __init__(self) -> None:
        self._schemas: dict[Hashable, Schema] = {}
        self._computations = 0

    def get_schema(self, tp: Any) -> Schema:
        key = cache_key(tp)
        cached = self._schemas.get(key)
        if cached is not None:
            return cached
        return self._schemas.setdefault(key, self._compute(tp))

    def _compute(self, tp: Any) -> Schema:
        self._computations += 1
        identity = type_identity(tp)
        try:
            schema = introspect(tp).readable_properties
        except Exception:
            logger.exception("Error getting properties for type %s", identity)
            return ()
        logger.debug("Cached %d properties for type %s", len(schema), identity)
        return schema

    @property
    def computations(self) -> int:
        """Schema computations performed since construction or the last clear."""
        return self._computations

    def identities(self) -> list[str]:
        """Display identities of the cached types, one per entry."""
        return [key if isinstance(key, str) else type_identity(key) for key in list(self._schemas)]

    def clear(self) -> int:
        """Drop every cached schema. Returns the number of entries removed."""
        count = len(self._schemas)
        self._schemas.clear()
        self._computations = 0
        return count

    def __len__(self) -> int:
        return len(self._schemas)
