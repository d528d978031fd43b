"""ValidationResultCache — memoized outcomes keyed by (type, raw field list).

The type part of the key is the type's
:func:`~propcheck.domain.schema.cache_key`. The field list is kept
verbatim: ``"Name,Email"`` and ``"Name, Email"`` are separate entries that
both evaluate to the same boolean.
"""

from __future__ import annotations

from collections.abc import Hashable


class ValidationResultCache:
    """Thread-safe insert-if-absent store of field-list validation results.

    When *enabled* is False every lookup misses and nothing is stored.
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled = enabled
        self._results: dict[tuple[Hashable, str], bool] = {}

    @property
    def enabled(self) -> bool:
        return self._enabled

    def get(self, key: Hashable, fields: str) -> bool | None:
        if not self._enabled:
            return None
        return self._results.get((key, fields))

    def put(self, key: Hashable, fields: str, valid: bool) -> bool:
        """Store *valid* unless an entry already exists; return the stored value."""
        if not self._enabled:
            return valid
        return self._results.setdefault((key, fields), valid)

    def clear(self) -> int:
        count = len(self._results)
        self._results.clear()
        return count

    def __len__(self) -> int:
        return len(self._results)
