"""Resolve ``package.module:ClassName`` strings to Python types."""

from __future__ import annotations

import importlib
from typing import Any

from propcheck.domain.errors import TargetImportError


def import_target(target: str) -> Any:
    """Import the object named by *target*.

    The part after ``:`` may be dotted to reach nested classes
    (``app.models:Matter.Summary``).

    Raises:
        TargetImportError: The module cannot be imported or the
            attribute does not exist.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise TargetImportError(f"Target must look like 'package.module:ClassName', got {target!r}")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise TargetImportError(f"Cannot import module {module_name!r}: {exc}") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise TargetImportError(f"{module_name!r} has no attribute {attr_path!r}") from exc
    return obj
