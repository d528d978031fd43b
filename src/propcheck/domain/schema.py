"""Type schemas — which attributes of a type a field list may name.

A schema is the ordered set of publicly readable attributes of a class.
Discovery understands three shapes of data type:

- pydantic models: ``model_fields`` then ``model_computed_fields``.
- dataclasses: ``dataclasses.fields()``.
- any other class: annotated attributes across the MRO, base first.

For every shape, ``property`` and ``functools.cached_property`` objects
defined on the class are appended after the declared fields. Names with a
leading underscore are never public.

INVARIANT: Discovery reads static type information only, never instance
data, so a schema computed once is valid for the life of the process.
"""

from __future__ import annotations

import dataclasses
import functools
import types
from collections.abc import Hashable, Iterator
from collections.abc import Sequence as AbcSequence
from collections.abc import Set as AbcSet
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

# Classes whose own attributes are framework plumbing, not data.
_FRAMEWORK_BASES: frozenset[type] = frozenset({object, BaseModel})

# Homogeneous containers: a dotted path descends into the element type.
_CONTAINER_ORIGINS: frozenset[Any] = frozenset(
    {list, set, frozenset, tuple, AbcSequence, AbcSet}
)


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PropertyDescriptor:
    """One attribute of a type.

    Attributes:
        name: Attribute name as declared on the class.
        declared_type: The class a dotted path descends into when this
            attribute is not the last segment, or None when unknown.
        readable: False for write-only properties.
    """

    name: str
    declared_type: Any = None
    readable: bool = True

    def matches(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.name.casefold() == name.casefold()

    @property
    def type_name(self) -> str:
        return _type_name(self.declared_type)


@dataclass(frozen=True)
class TypeDescriptor:
    """Identity of a type plus every attribute discovered on it."""

    identity: str
    properties: tuple[PropertyDescriptor, ...] = ()

    @property
    def readable_properties(self) -> tuple[PropertyDescriptor, ...]:
        return tuple(p for p in self.properties if p.readable)


# ---------------------------------------------------------------------------
# Identity and annotation helpers
# ---------------------------------------------------------------------------


def _is_class(tp: Any) -> bool:
    return isinstance(tp, type) and not isinstance(tp, types.GenericAlias)


def type_identity(tp: Any) -> str:
    """Display name for *tp*: ``module.QualName`` for classes.

    Not unique: two classes built by the same factory share it. Caches key
    on :func:`cache_key` instead.
    """
    if _is_class(tp):
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)


def cache_key(tp: Any) -> Hashable:
    """Key identifying *tp* itself in schema and result caches.

    The type object is used when hashable, so equally named classes never
    share an entry. Unhashable annotations fall back to their identity.
    """
    try:
        hash(tp)
    except TypeError:
        return type_identity(tp)
    return tp


def unwrap_declared_type(annotation: Any) -> Any:
    """Reduce an annotation to the class a dotted path should descend into.

    Strips ``Annotated``, ``Optional`` / ``X | None``, and homogeneous
    containers (``list[X]``, ``tuple[X, ...]``, ``Sequence[X]``). Anything
    else, including unions of several types, is returned unchanged.
    """
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation = get_args(annotation)[0]
        elif origin is Union or origin is types.UnionType:
            members = [a for a in get_args(annotation) if a is not type(None)]
            if len(members) != 1:
                return annotation
            annotation = members[0]
        elif origin in _CONTAINER_ORIGINS:
            args = [a for a in get_args(annotation) if a is not Ellipsis]
            if len(args) != 1:
                return annotation
            annotation = args[0]
        else:
            return annotation


def _type_name(tp: Any) -> str:
    if tp is None:
        return "unknown"
    if _is_class(tp):
        return tp.__name__
    return str(tp).replace("typing.", "")


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def _data_classes(tp: type) -> list[type]:
    """The MRO base-first, without framework plumbing."""
    return [c for c in reversed(tp.__mro__) if c not in _FRAMEWORK_BASES]


def _declared_fields(tp: type) -> Iterator[tuple[str, Any]]:
    """Yield ``(name, annotation)`` for declared data fields in order."""
    if issubclass(tp, BaseModel):
        for name, info in tp.model_fields.items():
            yield name, info.annotation
        for name, computed in tp.model_computed_fields.items():
            yield name, computed.return_type
        return

    hints = get_type_hints(tp)
    if dataclasses.is_dataclass(tp):
        for f in dataclasses.fields(tp):
            yield f.name, hints.get(f.name)
        return

    for name, hint in hints.items():
        if get_origin(hint) is ClassVar or hint is ClassVar:
            continue
        yield name, hint


def _declared_properties(tp: type) -> Iterator[tuple[str, Any, bool]]:
    """Yield ``(name, return annotation, readable)`` for class properties."""
    for cls in _data_classes(tp):
        for name, attr in vars(cls).items():
            if isinstance(attr, property):
                getter = attr.fget
            elif isinstance(attr, functools.cached_property):
                getter = attr.func
            else:
                continue
            if getter is None:
                yield name, None, False
                continue
            yield name, get_type_hints(getter).get("return"), True


def introspect(tp: Any) -> TypeDescriptor:
    """Discover the attributes of *tp* in declaration order.

    Non-class inputs (``None``, ``Any``, heterogeneous unions) have no
    attributes. Later declarations of an already-seen name are ignored.

    Raises:
        NameError: A forward reference in an annotation cannot be resolved.
        TypeError: The annotations of *tp* cannot be evaluated.
    """
    identity = type_identity(tp)
    if not _is_class(tp):
        return TypeDescriptor(identity=identity)

    seen: dict[str, PropertyDescriptor] = {}
    for name, annotation in _declared_fields(tp):
        if name.startswith("_") or name in seen:
            continue
        seen[name] = PropertyDescriptor(name=name, declared_type=unwrap_declared_type(annotation))

    for name, annotation, readable in _declared_properties(tp):
        if name.startswith("_") or name in seen:
            continue
        seen[name] = PropertyDescriptor(
            name=name,
            declared_type=unwrap_declared_type(annotation),
            readable=readable,
        )

    return TypeDescriptor(identity=identity, properties=tuple(seen.values()))


def find_property(
    schema: tuple[PropertyDescriptor, ...], name: str
) -> PropertyDescriptor | None:
    """Return the first descriptor in *schema* matching *name*, ignoring case."""
    for descriptor in schema:
        if descriptor.matches(name):
            return descriptor
    return None
