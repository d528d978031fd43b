"""ShapingService — project objects onto a validated ``fields=`` list.

Shaping runs only after the field list passes validation, so every
requested path is known to exist on the item type. Requested names are
matched case-insensitively and emitted under their declared spelling.
When a field list names both a property and one of its sub-paths, the
whole property wins and the sub-paths are ignored, whatever the order::

    shape([matter], "name, owner.email")
    # -> [{"name": "...", "owner": {"email": "..."}}]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from propcheck.domain.schema import PropertyDescriptor
from propcheck.services.properties import PropertyValidationService, display_name, split_fields
from propcheck.services.result import ServiceResult

logger = logging.getLogger(__name__)

Chain = tuple[PropertyDescriptor, ...]


def _drop_covered(chains: list[Chain]) -> list[Chain]:
    """Remove chains that repeat or extend another requested chain."""
    paths = {tuple(d.name for d in chain) for chain in chains}
    kept: list[Chain] = []
    seen: set[tuple[str, ...]] = set()
    for chain in chains:
        path = tuple(d.name for d in chain)
        if path in seen or any(path[:i] in paths for i in range(1, len(path))):
            continue
        seen.add(path)
        kept.append(chain)
    return kept


class ShapingService:
    """Build field-limited dict views of objects."""

    def __init__(self, validator: PropertyValidationService) -> None:
        self._validator = validator

    def shape(
        self,
        items: Iterable[Any],
        fields: str | None,
        *,
        tp: Any = None,
    ) -> ServiceResult:
        """Shape every item in *items* to the paths named by *fields*.

        An empty field list selects every readable property. The item type
        is *tp* when given, otherwise the type of the first item.
        """
        op = "shape"
        rows = list(items)
        item_type = tp if tp is not None else (type(rows[0]) if rows else None)
        if item_type is None:
            return ServiceResult(ok=True, op=op, data={"count": 0, "items": []})

        check = self._validator.validate_fields(item_type, fields)
        if not check.ok:
            assert check.error is not None
            return ServiceResult(ok=False, op=op, error=check.error)

        root = self._validator.schemas.get_schema(item_type)
        if fields is None or not fields.strip():
            chains = [(descriptor,) for descriptor in root]
        else:
            chains = []
            for token in split_fields(fields):
                chain = self._validator.resolver.resolve(root, token)
                # Validation passed, so every token resolves.
                assert chain is not None
                chains.append(chain)
            chains = _drop_covered(chains)

        shaped = [self._shape_one(row, chains) for row in rows]
        logger.debug("Shaped %d items of %s", len(shaped), display_name(item_type))
        return ServiceResult(ok=True, op=op, data={"count": len(shaped), "items": shaped})

    @classmethod
    def _shape_one(cls, obj: Any, chains: list[Chain]) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for chain in chains:
            cls._assign(out, obj, chain)
        return out

    @classmethod
    def _assign(cls, target: dict[str, Any], obj: Any, chain: Chain) -> None:
        head, rest = chain[0], chain[1:]
        value = getattr(obj, head.name, None)
        if not rest:
            target[head.name] = value
            return
        if value is None:
            target.setdefault(head.name, None)
            return

        if isinstance(value, (list, tuple, set, frozenset)):
            elements = list(value)
            existing = target.get(head.name)
            if not isinstance(existing, list) or len(existing) != len(elements):
                existing = [{} for _ in elements]
                target[head.name] = existing
            for sub, element in zip(existing, elements, strict=True):
                cls._assign(sub, element, rest)
            return

        nested = target.get(head.name)
        if not isinstance(nested, dict):
            nested = {}
            target[head.name] = nested
        cls._assign(nested, value, rest)
