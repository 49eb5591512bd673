"""``TypedArray`` — the list returned by array casting.

A plain ``list`` that remembers its owning document and field path so that
in-place mutation can be reported back with ``owner.mark_modified(path)``.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from .core import is_exportable


class TypedArray(list):
    """Ordered sequence bound to an owner document and a field path.

    Constructing from an existing list copies the element references only;
    the elements themselves are shared until they are replaced.
    """

    def __init__(self, values: Iterable[Any] = (), path: Optional[str] = None, owner: Any = None) -> None:
        super().__init__(values)
        self._path = path
        self._owner = owner

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def owner(self) -> Any:
        return self._owner

    def _mark_modified(self) -> None:
        if self._owner is not None and self._path is not None:
            self._owner.mark_modified(self._path)

    # -- mutators -----------------------------------------------------------

    def append(self, value: Any) -> None:
        super().append(value)
        self._mark_modified()

    def extend(self, values: Iterable[Any]) -> None:
        super().extend(values)
        self._mark_modified()

    def insert(self, index: int, value: Any) -> None:
        super().insert(index, value)
        self._mark_modified()

    def __setitem__(self, index, value) -> None:
        super().__setitem__(index, value)
        self._mark_modified()

    def __delitem__(self, index) -> None:
        super().__delitem__(index)
        self._mark_modified()

    def __iadd__(self, values):
        result = super().__iadd__(values)
        self._mark_modified()
        return result

    def pop(self, index: int = -1) -> Any:
        value = super().pop(index)
        self._mark_modified()
        return value

    def remove(self, value: Any) -> None:
        super().remove(value)
        self._mark_modified()

    def clear(self) -> None:
        super().clear()
        self._mark_modified()

    def sort(self, *args, **kwargs) -> None:
        super().sort(*args, **kwargs)
        self._mark_modified()

    def reverse(self) -> None:
        super().reverse()
        self._mark_modified()

    # -- export -------------------------------------------------------------

    def to_object(self) -> list:
        """Return a plain list, flattening exportable elements."""
        return [v.to_object() if is_exportable(v) else v for v in self]

    def __repr__(self) -> str:
        return f"TypedArray({list.__repr__(self)}, path={self._path!r})"
