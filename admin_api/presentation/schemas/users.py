import typing as t
import pydantic as p
import admin_api.domain.models as domain
from admin_api.presentation.schemas.alerts import Alert, AlertsResponse

__all__ = ['UserPayload', 'UserResponse', 'UserListResponse']


class UserPayload(domain.User):
    """Request body of POST/PUT /users. Every field is optional here, the validation pipeline decides what is missing.
    id, lastUpdated and rolename are accepted but ignored: the path and the database own them.
    """
    model_config = p.ConfigDict(extra='ignore')

    def to_domain(self) -> domain.User:
        return domain.User.model_validate(self.model_dump(exclude={'id', 'last_updated', 'role_name'}))


class UserResponse(AlertsResponse):
    response: dict[str, t.Any]

    @classmethod
    def of(cls, user: domain.User, text: str | None = None) -> 'UserResponse':
        alerts = [Alert(level='success', text=text)] if text else []
        return cls(response=user.to_wire(), alerts=alerts)


class UserListResponse(AlertsResponse):
    response: list[dict[str, t.Any]]
