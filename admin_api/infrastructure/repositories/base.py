"""Generic transactional CRUD engine.

A resource type plugs in through a ResourceMapping: the table, the select statement, the filter whitelist,
value builders for insert/update and the row -> record conversion. SQLAResourceRepository runs every
mutation in its own session: one statement, an exact row count check, commit or roll back.
"""
from abc import ABC, abstractmethod
import contextlib
import logging
import typing as t

import sqlalchemy as sa
import sqlalchemy.exc as saexc
from sqlalchemy.ext.asyncio import AsyncSession

import admin_api.domain.exceptions as domexc
import admin_api.domain.models as domain
import admin_api.domain.repositories as repo
import admin_api.infrastructure.interfaces as iabc
from admin_api.infrastructure.db import SQLAlchemyUnitOfWork, ConflictTranslator, WhereColumn, build_where_and_order_by
from admin_api.infrastructure.telemetry.traces import TracerType
from admin_api.common.config import Config

__all__ = ["ResourceMapping", "SQLAResourceRepository"]

logger = logging.getLogger('admin_api.storage')

R = t.TypeVar("R", bound=domain.IIdentifiable)


class ResourceMapping(ABC, t.Generic[R]):
    """Everything the engine needs to know about one resource type"""
    type_name: str
    table: sa.Table
    tenant_column: sa.ColumnElement | None = None
    id_column_name: str = 'id'
    timestamp_column_name: str = 'last_updated'

    @property
    def id_column(self) -> sa.Column:
        return self.table.c[self.id_column_name]

    @property
    def timestamp_column(self) -> sa.Column:
        return self.table.c[self.timestamp_column_name]

    @abstractmethod
    def select_query(self) -> sa.Select: ...

    @abstractmethod
    def filter_columns(self) -> t.Mapping[str, WhereColumn]:
        '''External filter name -> column it compares against'''

    @abstractmethod
    def from_row(self, row: sa.Row) -> R: ...

    @abstractmethod
    def insert_values(self, record: R) -> dict[str, t.Any]: ...

    @abstractmethod
    def update_values(self, record: R) -> dict[str, t.Any]:
        '''Every settable column. Update is a full row replace'''

    def deactivate_values(self) -> dict[str, t.Any]:
        return {'active': False}

    async def prepare(self, values: dict[str, t.Any]) -> dict[str, t.Any]:
        '''Runs before insert/update statements, e.g. to hash credentials. Must not touch the record'''
        return values

    def unique_constraints(self) -> t.Mapping[str, str]:
        '''Constraint name -> column, used to attribute conflicts to a field'''
        return {}


class SQLAResourceRepository(repo.IResourceRepository[R]):
    def __init__(self, db_manager: iabc.SessionManagerInterface[t.Any, AsyncSession], mapping: ResourceMapping[R],
                 default_limit: int | None = Config.DEFAULT_PAGE_LIMIT, max_limit: int | None = Config.MAX_PAGE_LIMIT):
        self._db = db_manager
        self.mapping = mapping
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.conflicts = ConflictTranslator.for_table(mapping.type_name, mapping.table.name, mapping.unique_constraints())

    @contextlib.asynccontextmanager
    async def _unit_of_work(self) -> t.AsyncIterator[SQLAlchemyUnitOfWork]:
        '''Session manager rolls back and closes. Anything SQLAlchemy raises past this point is a system error'''
        try:
            async with self._db.session() as session:
                yield SQLAlchemyUnitOfWork(session)
        except saexc.SQLAlchemyError as e:
            logger.exception(f"[DB] {self.mapping.type_name} transaction failed")
            raise domexc.ResourceSystemError(f"storage failure: {e.__class__.__name__}", orig=e) from e

    def _translate(self, e: saexc.SQLAlchemyError) -> domexc.ResourceException:
        if isinstance(e, saexc.IntegrityError):
            conflict = self.conflicts.translate(e)
            if conflict is not None:
                return conflict
        logger.error(f"[DB] {self.mapping.type_name} statement failed: {e}")
        return domexc.ResourceSystemError(f"storage failure: {e.__class__.__name__}", orig=e)

    async def _execute(self, session: AsyncSession, stmt) -> sa.Result:
        try:
            return await session.execute(stmt)
        except saexc.SQLAlchemyError as e:
            raise self._translate(e) from e

    async def _commit(self, uow: SQLAlchemyUnitOfWork) -> None:
        try:
            await uow.commit()
        except saexc.SQLAlchemyError as e:
            raise self._translate(e) from e

    async def _prepare(self, values: dict[str, t.Any]) -> dict[str, t.Any]:
        try:
            return await self.mapping.prepare(values)
        except domexc.ResourceException:
            raise
        except Exception as e:
            logger.error(f"[DB] preparing {self.mapping.type_name} values failed: {e.__class__.__name__}")
            raise domexc.ResourceSystemError(f"could not prepare {self.mapping.type_name}", orig=e) from e

    def _log_mutation(self, action: str, record: R):
        async def hook():
            logger.info(f"[{self.mapping.type_name.upper()}S] {action} {self.mapping.type_name} '{record.audit_label()}'")
        return hook

    @TracerType.traced
    async def create(self, record: R) -> R:
        if record.identity()[1]:
            raise domexc.ResourceSystemError(f"{self.mapping.type_name} already has an id, storage assigns it on create")
        values = await self._prepare(self.mapping.insert_values(record))
        stmt = (
            sa.insert(self.mapping.table)
            .values(**values)
            .returning(self.mapping.id_column, self.mapping.timestamp_column)
        )
        async with self._unit_of_work() as uow:
            rows = (await self._execute(uow.session, stmt)).all()
            if len(rows) != 1:
                raise domexc.ResourceSystemError(
                    f"{self.mapping.type_name} insert returned {len(rows)} rows, expected exactly one")
            new_id, last_updated = rows[0]
            await self._commit(uow)
            # the record only learns its identity once the row is committed
            record.set_identity(new_id)
            setattr(record, self.mapping.timestamp_column_name, last_updated)
            uow.after_commit('audit log', self._log_mutation('created', record))
            await uow.run_post_commit_hooks()
        return record

    @TracerType.traced
    async def update(self, record: R) -> R:
        record_id, present = record.identity()
        if not present:
            raise domexc.ResourceMissing(f"no {self.mapping.type_name} found with this id")

        values = await self._prepare(self.mapping.update_values(record))
        values[self.mapping.timestamp_column_name] = sa.func.now()
        stmt = (
            sa.update(self.mapping.table)
            .where(self.mapping.id_column == record_id)
            .values(**values)
            .returning(self.mapping.timestamp_column)
        )
        async with self._unit_of_work() as uow:
            rows = (await self._execute(uow.session, stmt)).all()
            if not rows:
                raise domexc.ResourceMissing(f"no {self.mapping.type_name} found with this id")
            if len(rows) > 1:
                raise domexc.ResourceSystemError(
                    f"{self.mapping.type_name} update affected {len(rows)} rows, expected exactly one")
            setattr(record, self.mapping.timestamp_column_name, rows[0][0])
            uow.after_commit('audit log', self._log_mutation('updated', record))
            await self._commit(uow)
        return record

    @TracerType.traced
    async def delete(self, record: R) -> None:
        '''Soft delete. lastUpdated moves with the column's onupdate default and is not read back'''
        record_id, present = record.identity()
        if not present:
            raise domexc.ResourceMissing(f"no {self.mapping.type_name} with that id found")

        stmt = (
            sa.update(self.mapping.table)
            .where(self.mapping.id_column == record_id)
            .values(**self.mapping.deactivate_values())
        )
        async with self._unit_of_work() as uow:
            result = await self._execute(uow.session, stmt)
            if result.rowcount == 0:
                raise domexc.ResourceMissing(f"no {self.mapping.type_name} with that id found")
            if result.rowcount > 1:
                raise domexc.ResourceSystemError(
                    f"{self.mapping.type_name} delete affected {result.rowcount} rows, expected exactly one")
            uow.after_commit('audit log', self._log_mutation('deleted', record))
            await self._commit(uow)

    @TracerType.traced
    async def read(self, parameters: t.Mapping[str, str], tenant_ids: t.Sequence[int] | None = None) -> list[R]:
        clauses = build_where_and_order_by(parameters, self.mapping.filter_columns(),
                                           default_limit=self.default_limit, max_limit=self.max_limit)
        if clauses.errors:
            raise domexc.ResourceValidationError(clauses.errors)

        stmt = clauses.apply(self.mapping.select_query())
        if tenant_ids is not None and self.mapping.tenant_column is not None:
            stmt = stmt.where(self.mapping.tenant_column.in_(list(tenant_ids)))
        if not clauses.order_by:
            stmt = stmt.order_by(self.mapping.id_column)
        logger.debug(f"[DB] {self.mapping.type_name} read: {stmt}")

        async with self._unit_of_work() as uow:
            rows = (await self._execute(uow.session, stmt)).all()
        return [self.mapping.from_row(row) for row in rows]

    @TracerType.traced
    async def get(self, id: int) -> R | None:
        stmt = self.mapping.select_query().where(self.mapping.id_column == id)
        async with self._unit_of_work() as uow:
            row = (await self._execute(uow.session, stmt)).one_or_none()
        return self.mapping.from_row(row) if row is not None else None
