"""Parameters — immutable, case-insensitive mapping of bound values.

Implements ``Mapping[str, Any]``. Keys are compared by their casefolded
form; iteration yields the casing that was stored last for each key.
Values are opaque: whatever the producing predicate bound is handed to
the responder unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

type ParameterItems = Mapping[str, Any] | Iterable[tuple[str, Any]]


class Parameters(Mapping[str, Any]):
    """Read-only, case-insensitive parameter bag.

    Construction follows dict semantics: when two keys differ only by case,
    the later pair wins (value and casing), while the entry keeps the
    position of the first one.

    Keys must be ``str``. A ``None`` or otherwise non-string key is a caller
    error and raises ``TypeError`` immediately.

    >>> params = Parameters([("Id", 7)])
    >>> params["id"], params["ID"]
    (7, 7)
    """

    __slots__ = ("_data",)

    _data: dict[str, tuple[str, Any]]

    def __init__(self, items: ParameterItems = ()) -> None:
        data: dict[str, tuple[str, Any]] = {}
        pairs = items.items() if isinstance(items, Mapping) else items
        for key, value in pairs:
            if not isinstance(key, str):
                msg = f"parameter name must be a string, got {type(key).__name__}"
                raise TypeError(msg)
            data[key.casefold()] = (key, value)
        object.__setattr__(self, "_data", data)

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> Any:
        if isinstance(key, str):
            entry = self._data.get(key.casefold())
            if entry is not None:
                return entry[1]
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return key.casefold() in self._data

    def __iter__(self) -> Iterator[str]:
        for key, _ in self._data.values():
            yield key

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        if not isinstance(other, Parameters):
            try:
                other = Parameters(other)
            except TypeError:
                return False
        return _folded(self) == _folded(other)

    __hash__ = None  # type: ignore[assignment]

    def __reduce__(self) -> tuple[Any, ...]:
        # Rebuild through the constructor; __setattr__ refuses slot restores.
        return (as_parameters, (list(self.items()),))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._data.values())
        return f"Parameters({{{items}}})"

    def merged(self, other: Mapping[str, Any]) -> Parameters:
        """Return a new mapping with *other* applied after this one.

        Keys in *other* win over case-insensitively equal keys here.
        """
        if not other:
            return self
        if not self:
            return as_parameters(other)
        return Parameters([*self.items(), *other.items()])


def _folded(params: Parameters) -> dict[str, Any]:
    return {folded: value for folded, (_, value) in params._data.items()}


# Shared by every result that binds nothing.
EMPTY_PARAMETERS = Parameters()


def as_parameters(items: ParameterItems | None = None) -> Parameters:
    """Normalize *items* to a ``Parameters`` instance.

    ``None`` and empty input both collapse to ``EMPTY_PARAMETERS``.
    """
    if items is None:
        return EMPTY_PARAMETERS
    params = items if isinstance(items, Parameters) else Parameters(items)
    return params if params else EMPTY_PARAMETERS
