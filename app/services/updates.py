"""Partial-update builder: accumulate field operations, commit them as one atomic UPDATE.

A builder collects a small closed set of operations against named columns
of one ORM model:

- SetField: field := value
- ReplaceList: field := values (whole-list replace, [] clears)
- Increment: field := field + amount (evaluated by the database)
- Touch: updated_at := now

build() freezes them into a ChangeSet. Repositories turn a ChangeSet into a
single UPDATE ... WHERE <predicate> RETURNING statement, so concurrent
updates never interleave field by field.
"""

from dataclasses import dataclass, field as dataclass_field
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import inspect

from app.core.errors import InvalidOperationError

TOUCH_FIELD = "updated_at"


@dataclass(frozen=True)
class SetField:
    field: str
    value: Any


@dataclass(frozen=True)
class ReplaceList:
    field: str
    values: list[Any]


@dataclass(frozen=True)
class Increment:
    field: str
    amount: int = 1


@dataclass(frozen=True)
class Touch:
    at: datetime
    field: str = TOUCH_FIELD


Operation = SetField | ReplaceList | Increment | Touch


@dataclass(frozen=True)
class ChangeSet:
    """Immutable, ordered collection of operations for one entity instance."""

    operations: tuple[Operation, ...]
    fields: frozenset[str] = dataclass_field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", frozenset(op.field for op in self.operations))

    def values(self, model: type) -> dict[str, Any]:
        """
        Resolve the operations into one column -> value mapping for model.

        Operations apply in call order, so a later operation on the same field
        supersedes an earlier one.
        """
        resolved: dict[str, Any] = {}
        for op in self.operations:
            if isinstance(op, SetField):
                resolved[op.field] = op.value
            elif isinstance(op, ReplaceList):
                resolved[op.field] = list(op.values)
            elif isinstance(op, Increment):
                resolved[op.field] = getattr(model, op.field) + op.amount
            elif isinstance(op, Touch):
                resolved[op.field] = op.at
            else:
                raise InvalidOperationError(f"Unsupported update operation: {op!r}")
        return resolved

    def __len__(self) -> int:
        return len(self.operations)


class UpdateBuilder:
    """
    Collects "set if provided" and "replace list if provided" operations for model.

    None means "not provided" and schedules nothing; an empty list is provided
    and clears the stored list. Field names are checked against the model's
    mapped columns so a typo fails fast instead of being silently ignored.
    """

    def __init__(self, model: type) -> None:
        self.model = model
        self._columns = frozenset(inspect(model).columns.keys())
        self._operations: list[Operation] = []
        self._touched = False

    def _check_field(self, field: str) -> None:
        if self._touched:
            raise InvalidOperationError("Cannot schedule updates after touch()")
        if field not in self._columns:
            raise InvalidOperationError(
                f"{self.model.__name__} has no column '{field}'"
            )

    def set(self, value: Any, field: str) -> "UpdateBuilder":
        """Schedule field := value unconditionally (None clears a nullable column)."""
        self._check_field(field)
        self._operations.append(SetField(field, value))
        return self

    def set_if_present(self, value: Any, field: str) -> "UpdateBuilder":
        if value is not None:
            self.set(value, field)
        return self

    def replace_list_if_present(self, values: list[Any] | None, field: str) -> "UpdateBuilder":
        if values is not None:
            self._check_field(field)
            self._operations.append(ReplaceList(field, list(values)))
        return self

    def increment(self, field: str, amount: int = 1) -> "UpdateBuilder":
        self._check_field(field)
        self._operations.append(Increment(field, amount))
        return self

    def touch(self, now: datetime | None = None) -> "UpdateBuilder":
        """Schedule updated_at := now. Call exactly once, after every other operation."""
        if self._touched:
            raise InvalidOperationError("touch() was already called for this change-set")
        self._check_field(TOUCH_FIELD)
        self._operations.append(Touch(now or datetime.now(UTC)))
        self._touched = True
        return self

    def __len__(self) -> int:
        return len(self._operations)

    def build(self) -> ChangeSet:
        if not self._operations:
            raise InvalidOperationError("No updates specified.")
        return ChangeSet(tuple(self._operations))
