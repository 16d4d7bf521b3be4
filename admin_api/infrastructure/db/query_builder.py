"""Turns caller supplied filters (query string parameters) into WHERE/ORDER BY/LIMIT clauses.

Only keys from a fixed whitelist reach the statement, and every value travels as a bind parameter.
"""
import dataclasses
import datetime as dt
import typing as t

import sqlalchemy as sa

from admin_api.domain.validation import FieldError

__all__ = [
    'Checker', 'is_int', 'is_bool', 'is_timestamp',
    'WhereColumn', 'QueryClauses', 'build_where_and_order_by',
    'ORDER_BY_KEY', 'SORT_ORDER_KEY', 'LIMIT_KEY', 'OFFSET_KEY',
]

ORDER_BY_KEY = 'orderby'
SORT_ORDER_KEY = 'sortOrder'
LIMIT_KEY = 'limit'
OFFSET_KEY = 'offset'
RESERVED_KEYS = frozenset({ORDER_BY_KEY, SORT_ORDER_KEY, LIMIT_KEY, OFFSET_KEY})


@dataclasses.dataclass(frozen=True)
class Checker:
    parse: t.Callable[[str], t.Any]
    expected: str


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ('true', 't', '1', 'yes'):
        return True
    if lowered in ('false', 'f', '0', 'no'):
        return False
    raise ValueError(value)


is_int = Checker(int, 'an integer')
is_bool = Checker(_parse_bool, 'a boolean')
is_timestamp = Checker(dt.datetime.fromisoformat, 'a timestamp')


@dataclasses.dataclass(frozen=True)
class WhereColumn:
    column: t.Any
    checker: Checker | None = None


@dataclasses.dataclass
class QueryClauses:
    where: list = dataclasses.field(default_factory=list)
    order_by: list = dataclasses.field(default_factory=list)
    limit: int | None = None
    offset: int | None = None
    errors: list[FieldError] = dataclasses.field(default_factory=list)

    def apply(self, stmt: sa.Select) -> sa.Select:
        if self.where:
            stmt = stmt.where(*self.where)
        if self.order_by:
            stmt = stmt.order_by(*self.order_by)
        if self.limit is not None:
            stmt = stmt.limit(self.limit)
        if self.offset:
            stmt = stmt.offset(self.offset)
        return stmt


def _non_negative(key: str, value: str, clauses: QueryClauses) -> int | None:
    try:
        number = int(value)
    except ValueError:
        number = -1
    if number < 0:
        clauses.errors.append(FieldError(key, 'must be a non-negative integer'))
        return None
    return number


def build_where_and_order_by(
        parameters: t.Mapping[str, str],
        columns: t.Mapping[str, WhereColumn],
        default_limit: int | None = None,
        max_limit: int | None = None) -> QueryClauses:
    clauses = QueryClauses(limit=default_limit)

    for key, value in parameters.items():
        if key in RESERVED_KEYS or key not in columns:
            continue
        where_column = columns[key]
        if where_column.checker is not None:
            try:
                parsed = where_column.checker.parse(value)
            except (TypeError, ValueError):
                clauses.errors.append(FieldError(key, f'must be {where_column.checker.expected}'))
                continue
        else:
            parsed = value
        clauses.where.append(where_column.column == parsed)

    direction = parameters.get(SORT_ORDER_KEY, 'asc')
    if direction not in ('asc', 'desc'):
        clauses.errors.append(FieldError(SORT_ORDER_KEY, "must be 'asc' or 'desc'"))
        direction = 'asc'

    order_key = parameters.get(ORDER_BY_KEY)
    if order_key in columns:
        column = columns[order_key].column
        clauses.order_by.append(column.desc() if direction == 'desc' else column.asc())

    if LIMIT_KEY in parameters:
        limit = _non_negative(LIMIT_KEY, parameters[LIMIT_KEY], clauses)
        if limit is not None:
            if max_limit is not None and limit > max_limit:
                clauses.errors.append(FieldError(LIMIT_KEY, f'must not exceed {max_limit}'))
            else:
                clauses.limit = limit

    if OFFSET_KEY in parameters:
        clauses.offset = _non_negative(OFFSET_KEY, parameters[OFFSET_KEY], clauses)

    return clauses
