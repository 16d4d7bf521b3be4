import typing as t
import pydantic as p

__all__ = ['Alert', 'AlertsResponse']


class Alert(p.BaseModel):
    level: t.Literal['success', 'info', 'warning', 'error']
    text: str


class AlertsResponse(p.BaseModel):
    alerts: list[Alert] = p.Field(default_factory=list)

    @classmethod
    def success(cls, text: str) -> t.Self:
        return cls(alerts=[Alert(level='success', text=text)])

    @classmethod
    def errors(cls, *texts: str) -> t.Self:
        return cls(alerts=[Alert(level='error', text=text) for text in texts])
