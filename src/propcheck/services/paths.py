"""PathResolver — walk dotted field paths through nested type schemas.

``address.street`` is checked by finding ``address`` in the root schema,
loading the schema of its declared type through the TypeSchemaCache, and
finding ``street`` there. The last segment is only looked up; its own
declared type is never expanded.
"""

from __future__ import annotations

from propcheck.domain.schema import PropertyDescriptor, find_property
from propcheck.services.schema_cache import Schema, TypeSchemaCache

PATH_SEPARATOR = "."


class PathResolver:
    """Resolve dotted paths case-insensitively against cached schemas."""

    def __init__(self, schemas: TypeSchemaCache) -> None:
        self._schemas = schemas

    def resolve(self, root: Schema, path: str) -> tuple[PropertyDescriptor, ...] | None:
        """Return the descriptor matched by each segment of *path*.

        Returns None as soon as a segment has no match. Empty segments
        (leading, trailing, or doubled separators) never match.
        """
        segments = path.split(PATH_SEPARATOR)
        last = len(segments) - 1
        current = root
        chain: list[PropertyDescriptor] = []
        for index, segment in enumerate(segments):
            descriptor = find_property(current, segment) if segment else None
            if descriptor is None:
                return None
            chain.append(descriptor)
            if index < last:
                current = self._schemas.get_schema(descriptor.declared_type)
        return tuple(chain)

    def path_exists(self, root: Schema, path: str) -> bool:
        return self.resolve(root, path) is not None
