import datetime as dt
import sqlmodel as sqlm
import sqlalchemy as sa

class TimestampedBaseModel(sqlm.SQLModel):
    '''last_updated is assigned by storage: on insert by the server default, on any UPDATE by the onupdate default
    unless the statement sets it explicitly.'''
    last_updated: dt.datetime | None = sqlm.Field(
        default=None,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={'server_default': sa.func.now(), 'onupdate': sa.func.now()},
    )
