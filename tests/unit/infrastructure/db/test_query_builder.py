import pytest
import datetime as dt
import sqlalchemy as sa
from sqlalchemy.sql.elements import True_, False_
import admin_api.infrastructure.db as idb

table = sa.table('things', sa.column('id'), sa.column('name'), sa.column('active'), sa.column('seen'))

COLUMNS = {
    'id': idb.WhereColumn(table.c.id, idb.is_int),
    'name': idb.WhereColumn(table.c.name),
    'active': idb.WhereColumn(table.c.active, idb.is_bool),
    'seen': idb.WhereColumn(table.c.seen, idb.is_timestamp),
}


def compiled(clauses: idb.QueryClauses) -> str:
    stmt = clauses.apply(sa.select(table.c.id))
    return str(stmt.compile(compile_kwargs={"literal_binds": False}))


def test_no_parameters_means_no_filters():
    clauses = idb.build_where_and_order_by({}, COLUMNS, default_limit=1000)
    assert clauses.where == []
    assert clauses.order_by == []
    assert clauses.errors == []
    assert clauses.limit == 1000


def test_unknown_keys_are_ignored():
    clauses = idb.build_where_and_order_by({'password': 'x', 'drop table': '1'}, COLUMNS)
    assert clauses.where == []
    assert clauses.errors == []


def test_values_are_bound_not_inlined():
    clauses = idb.build_where_and_order_by({'name': "x' OR '1'='1"}, COLUMNS)
    sql = compiled(clauses)
    assert "OR '1'='1" not in sql
    assert ':name_1' in sql


@pytest.mark.parametrize(
    "parameters, expected",
    [
        ({'id': '5'}, 5),
        ({'seen': '2024-05-01T10:00:00'}, dt.datetime(2024, 5, 1, 10)),
    ]
)
def test_checkers_parse_values(parameters, expected):
    clauses = idb.build_where_and_order_by(parameters, COLUMNS)
    assert clauses.errors == []
    assert len(clauses.where) == 1
    assert clauses.where[0].right.value == expected


@pytest.mark.parametrize("value, expected", [("true", True_), ("YES", True_), ("f", False_), ("0", False_)])
def test_bool_checker(value, expected):
    clauses = idb.build_where_and_order_by({"active": value}, COLUMNS)
    assert clauses.errors == []
    assert isinstance(clauses.where[0].right, expected)


@pytest.mark.parametrize(
    "parameters, field, message",
    [
        ({'id': 'five'}, 'id', 'must be an integer'),
        ({'active': 'maybe'}, 'active', 'must be a boolean'),
        ({'seen': 'yesterday'}, 'seen', 'must be a timestamp'),
        ({'sortOrder': 'sideways'}, 'sortOrder', "must be 'asc' or 'desc'"),
        ({'limit': '-1'}, 'limit', 'must be a non-negative integer'),
        ({'offset': 'abc'}, 'offset', 'must be a non-negative integer'),
        ({'limit': '20000'}, 'limit', 'must not exceed 10000'),
    ]
)
def test_malformed_values_are_errors(parameters, field, message):
    clauses = idb.build_where_and_order_by(parameters, COLUMNS, max_limit=10000)
    assert [(e.field, e.message) for e in clauses.errors] == [(field, message)]


def test_several_errors_are_collected():
    clauses = idb.build_where_and_order_by({'id': 'x', 'active': 'y', 'name': 'fine'}, COLUMNS)
    assert sorted(e.field for e in clauses.errors) == ['active', 'id']
    assert len(clauses.where) == 1


def test_order_limit_offset():
    clauses = idb.build_where_and_order_by(
        {'orderby': 'name', 'sortOrder': 'desc', 'limit': '10', 'offset': '20'}, COLUMNS, default_limit=1000)
    assert clauses.errors == []
    assert clauses.limit == 10
    assert clauses.offset == 20
    sql = compiled(clauses)
    assert 'ORDER BY things.name DESC' in sql
    assert 'LIMIT' in sql and 'OFFSET' in sql


def test_unknown_orderby_is_ignored():
    clauses = idb.build_where_and_order_by({'orderby': 'password'}, COLUMNS)
    assert clauses.order_by == []
    assert clauses.errors == []
