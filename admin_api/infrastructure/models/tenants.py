import sqlmodel as sqlm
import admin_api.infrastructure.models.base as base


class Role(sqlm.SQLModel, table=True):
    __tablename__ = 'roles'
    id: int | None = sqlm.Field(default=None, primary_key=True)
    name: str = sqlm.Field(unique=True, max_length=128)
    description: str | None = None
    priv_level: int = sqlm.Field(default=10)


class Tenant(base.TimestampedBaseModel, table=True):
    __tablename__ = 'tenants'
    id: int | None = sqlm.Field(default=None, primary_key=True)
    name: str = sqlm.Field(unique=True, max_length=128)
    active: bool = sqlm.Field(default=True)
    parent_id: int | None = sqlm.Field(default=None, foreign_key='tenants.id', description='NULL for root tenants')
