"""Record values and the kinds that describe them.

A :class:`Record` is an immutable bag of field values bound to a
:class:`RecordKind`. The kind names the store collection (a table, a
dict bucket) and the fields a record of that kind may carry.

Records distinguish *unset* fields from fields explicitly set to None:
``get()`` reports both as None, but only set fields are ``carried()``
and therefore only set fields win in :meth:`Record.merge`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

DEFAULT_IDENTITY = "id"


@dataclass(frozen=True)
class RecordKind:
    """Schema of one record collection.

    Attributes:
        name: Collection name used to route store calls (e.g. a table name).
        fields: Ordered field names a record of this kind defines.
        identity: Name of the identifying key. May be absent from *fields*
            for kinds without one; ``find``/``upsert`` then always insert.
    """

    name: str
    fields: tuple[str, ...]
    identity: str = DEFAULT_IDENTITY

    def __post_init__(self) -> None:
        if len(set(self.fields)) != len(self.fields):
            msg = f"Duplicate field names in kind {self.name!r}: {self.fields}"
            raise ValueError(msg)

    @classmethod
    def define(
        cls,
        name: str,
        fields: Iterable[str],
        *,
        identity: str = DEFAULT_IDENTITY,
    ) -> RecordKind:
        """Build a kind from any iterable of field names."""
        return cls(name=name, fields=tuple(fields), identity=identity)

    def has_field(self, name: str) -> bool:
        return name in self.fields

    @property
    def has_identity(self) -> bool:
        """Whether records of this kind define their identifying key."""
        return self.identity in self.fields

    def new(self, **values: Any) -> Record:
        """Construct a record of this kind from keyword field values."""
        return Record(self, values)

    def blank(self) -> Record:
        """A record of this kind carrying no fields."""
        return Record(self, {})

    def __call__(self, **values: Any) -> Record:
        return self.new(**values)


@runtime_checkable
class RecordLike(Protocol):
    """Capabilities the conditional core needs from a record.

    :class:`Record` implements this; store adapters may hand back their
    own record types as long as they satisfy it.
    """

    @property
    def kind(self) -> RecordKind: ...

    def has_field(self, name: str) -> bool: ...

    def get(self, name: str) -> Any: ...

    def to_dict(self) -> dict[str, Any]: ...

    def carried(self) -> dict[str, Any]: ...

    def merge(self, other: RecordLike) -> RecordLike: ...


@dataclass(frozen=True, init=False)
class Record:
    """Immutable record value.

    Usage::

        User = RecordKind.define("users", ["id", "name", "age"])
        harry = User(name="Harry")
        harry.get("id")        # None
        harry.carried()        # {"name": "Harry"}
    """

    kind: RecordKind
    _values: Mapping[str, Any] = field(repr=False)

    def __init__(self, kind: RecordKind, values: Mapping[str, Any] | None = None) -> None:
        values = dict(values or {})
        unknown = [name for name in values if not kind.has_field(name)]
        if unknown:
            msg = f"Kind {kind.name!r} does not define field(s): {', '.join(sorted(unknown))}"
            raise ValueError(msg)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "_values", MappingProxyType(values))

    def has_field(self, name: str) -> bool:
        return self.kind.has_field(name)

    def get(self, name: str, default: Any = None) -> Any:
        """Value of *name*, or *default* when the field is unset."""
        return self._values.get(name, default)

    def is_set(self, name: str) -> bool:
        return name in self._values

    @property
    def identity(self) -> Any:
        """Value of the kind's identifying key (None when unset or undefined)."""
        return self._values.get(self.kind.identity)

    def to_dict(self) -> dict[str, Any]:
        """Full snapshot of every field of the kind; unset fields map to None."""
        return {name: self._values.get(name) for name in self.kind.fields}

    def carried(self) -> dict[str, Any]:
        """Only the fields this record explicitly carries, in kind order."""
        return {name: self._values[name] for name in self.kind.fields if name in self._values}

    def replace(self, **values: Any) -> Record:
        """New record with *values* set on top of this one."""
        return Record(self.kind, {**self._values, **values})

    def merge(self, other: RecordLike) -> Record:
        """New record: this record's fields overlaid with *other*'s carried fields.

        Raises:
            ValueError: If *other* is of a different kind.
        """
        if other.kind.name != self.kind.name:
            msg = f"Cannot merge {other.kind.name!r} record onto {self.kind.name!r} record"
            raise ValueError(msg)
        return Record(self.kind, {**self._values, **other.carried()})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.kind == other.kind and dict(self._values) == dict(other._values)

    def __hash__(self) -> int:
        return hash((self.kind, tuple(sorted(self._values.items(), key=lambda kv: kv[0]))))

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self.carried().items())
        return f"Record<{self.kind.name}>({inner})"
