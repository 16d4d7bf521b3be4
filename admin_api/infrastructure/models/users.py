import datetime as dt
import sqlmodel as sqlm
import sqlalchemy as sa
import admin_api.infrastructure.models.base as base

USERNAME_CONSTRAINT = 'uq_users_username'
EMAIL_CONSTRAINT = 'uq_users_email'


class User(base.TimestampedBaseModel, table=True):
    __tablename__ = 'users'
    __table_args__ = (
        sa.UniqueConstraint('username', name=USERNAME_CONSTRAINT),
        sa.UniqueConstraint('email', name=EMAIL_CONSTRAINT),
    )
    id: int | None = sqlm.Field(default=None, primary_key=True, description='Integer user identifier')
    username: str = sqlm.Field(max_length=128, description='A unique username used for logging in')
    email: str | None = sqlm.Field(default=None, max_length=255)
    full_name: str | None = None
    local_passwd: str | None = sqlm.Field(default=None, description='A hashed password')
    active: bool = sqlm.Field(default=True, description='Turn on/off a user. Deleting a user only turns it off')
    new_user: bool = sqlm.Field(default=False)
    role: int | None = sqlm.Field(default=None, foreign_key='roles.id')
    tenant_id: int | None = sqlm.Field(default=None, foreign_key='tenants.id')
    address_line1: str | None = None
    address_line2: str | None = None
    city: str | None = None
    company: str | None = None
    country: str | None = None
    gid: int | None = None
    uid: int | None = None
    phone_number: str | None = None
    postal_code: str | None = None
    public_ssh_key: str | None = None
    registration_sent: dt.datetime | None = sqlm.Field(default=None, sa_type=sa.DateTime(timezone=True))
    state_or_province: str | None = None
    token: str | None = None
