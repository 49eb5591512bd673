"""Registry factory — the single place where the built-in types are assembled.

``build_default_registry`` returns a ``TypeRegistry`` holding every
built-in element type; ``default_registry`` returns the process-wide
instance used when a schema or array is declared without an explicit
registry.

Customisation points:

* **casters** – dict of name → caster class.  Entries replace built-ins of
                the same name or add new types.
"""

from __future__ import annotations

from typing import Mapping, Optional

from .casters import BUILTIN_CASTERS, PYTHON_TYPE_CASTERS
from .core import TypeRegistry

_DEFAULT_REGISTRY: Optional[TypeRegistry] = None


def build_default_registry(*, casters: Mapping[str, type] | None = None) -> TypeRegistry:
    """Assemble a ``TypeRegistry`` with the built-in element types.

    Python types listed in ``PYTHON_TYPE_CASTERS`` are registered as aliases
    of the caster that finally holds their name, so overriding ``"Number"``
    also changes what ``int`` resolves to.

    Example::

        registry = build_default_registry(casters={"Money": MoneyCaster})
        schema = Schema({"prices": ["Money"]}, registry=registry)
    """
    resolved = {**BUILTIN_CASTERS, **(casters or {})}

    registry = TypeRegistry()
    for name, caster_cls in resolved.items():
        aliases = [py_type for py_type, alias in PYTHON_TYPE_CASTERS.items() if alias == name]
        registry.register(name, caster_cls, aliases=aliases)
    return registry


def default_registry() -> TypeRegistry:
    """Shared registry built on first use."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = build_default_registry()
    return _DEFAULT_REGISTRY
