import re
import typing as t
import logging

import sqlalchemy.exc as saexc

import admin_api.domain.exceptions as domexc

__all__ = ['ConflictTranslator', 'UNIQUE_VIOLATION']

logger = logging.getLogger('admin_api.storage')

UNIQUE_VIOLATION = '23505'

_PG_CONSTRAINT = re.compile(r'unique constraint "(?P<name>[^"]+)"')
_SQLITE_CONSTRAINT = re.compile(r'UNIQUE constraint failed: (?P<name>[^\n]+)')


class ConflictTranslator:
    """Maps a unique constraint violation raised by the driver onto a field-attributed ResourceConflict.

    `fields` maps constraint names (PostgreSQL) and `table.column` keys (SQLite) to logical field names.
    """

    def __init__(self, type_name: str, fields: t.Mapping[str, str]):
        self.type_name = type_name
        self.fields = dict(fields)

    @classmethod
    def for_table(cls, type_name: str, table: str, constraints: t.Mapping[str, str]) -> 'ConflictTranslator':
        """`constraints` maps a constraint name to the column it covers"""
        fields = {f'{table}_pkey': 'id', f'{table}.id': 'id'}
        for constraint, column in constraints.items():
            fields[constraint] = column
            fields[f'{table}.{column}'] = column
        return cls(type_name, fields)

    @staticmethod
    def _driver_error(e: saexc.IntegrityError):
        return getattr(e, 'orig', None)

    def _constraint_name(self, e: saexc.IntegrityError) -> tuple[bool, str | None]:
        """Returns (is a unique violation, constraint name if it could be extracted)"""
        orig = self._driver_error(e)
        message = str(orig) if orig is not None else str(e)

        sqlstate = getattr(orig, 'sqlstate', None) or getattr(orig, 'pgcode', None)
        # asyncpg errors are wrapped by the SQLAlchemy adapter, the original one is the cause
        cause = getattr(orig, '__cause__', None)
        if sqlstate is None and cause is not None:
            sqlstate = getattr(cause, 'sqlstate', None)

        # asyncpg names the constraint for FK and CHECK violations too, the name only counts for a unique one
        name = getattr(cause, 'constraint_name', None)
        if name and sqlstate == UNIQUE_VIOLATION:
            return True, name
        if sqlstate is not None and sqlstate != UNIQUE_VIOLATION:
            return False, None

        if (match := _PG_CONSTRAINT.search(message)) is not None:
            return True, match.group('name')
        if (match := _SQLITE_CONSTRAINT.search(message)) is not None:
            # a composite key is reported as "t.a, t.b", the first column is enough for the caller
            return True, match.group('name').split(',')[0].strip()
        if sqlstate == UNIQUE_VIOLATION:
            return True, None
        return False, None

    def translate(self, e: saexc.IntegrityError) -> domexc.ResourceConflict | None:
        is_unique, name = self._constraint_name(e)
        if not is_unique:
            return None

        field = self.fields.get(name) if name else None
        if field is None:
            logger.warning(f"[CONFLICTS] Unknown unique constraint '{name}' on {self.type_name}")
            return domexc.ResourceConflict(
                f"a {self.type_name} with conflicting values already exists", orig=e)
        return domexc.ResourceConflict(
            f"a {self.type_name} with this {field} already exists", field=field, orig=e)
