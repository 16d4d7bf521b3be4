import typing as t
import pydantic as p
import datetime as dt
from admin_api.domain.models.resources import IIdentifiable, ITenantScoped
import admin_api.domain.exceptions as domexc


class CurrentUser(p.BaseModel):
    '''The acting user, as resolved by the authentication layer'''
    id: int
    username: str
    tenant_id: int | None = None


class User(p.BaseModel, IIdentifiable, ITenantScoped):
    """User record. Every field is optional on the wire; validation decides which ones are mandatory.
    Field aliases are the external (JSON) names.
    """
    model_config = p.ConfigDict(populate_by_name=True, validate_assignment=True)

    active: bool | None = None
    address_line1: str | None = p.Field(default=None, alias='addressLine1')
    address_line2: str | None = p.Field(default=None, alias='addressLine2')
    city: str | None = None
    company: str | None = None
    country: str | None = None
    email: str | None = None
    full_name: str | None = p.Field(default=None, alias='fullName')
    gid: int | None = None
    id: int | None = None
    last_updated: dt.datetime | None = p.Field(default=None, alias='lastUpdated')
    local_passwd: str | None = p.Field(default=None, alias='localPasswd')
    new_user: bool | None = p.Field(default=None, alias='newUser')
    phone_number: str | None = p.Field(default=None, alias='phoneNumber')
    postal_code: str | None = p.Field(default=None, alias='postalCode')
    public_ssh_key: str | None = p.Field(default=None, alias='publicSshKey')
    registration_sent: dt.datetime | None = p.Field(default=None, alias='registrationSent')
    role: int | None = None
    role_name: str | None = p.Field(default=None, alias='rolename')
    state_or_province: str | None = p.Field(default=None, alias='stateOrProvince')
    tenant_id: int | None = p.Field(default=None, alias='tenantId')
    token: str | None = None
    uid: int | None = None
    username: str | None = None

    def identity(self) -> tuple[int, bool]:
        if self.id is None:
            return 0, False
        return self.id, True

    def audit_label(self) -> str:
        if self.username is not None:
            return self.username
        return str(self.identity()[0])

    def type_name(self) -> str:
        return "user"

    def set_identity(self, id: int) -> None:
        if self.id is not None and self.id != id:
            raise domexc.ResourceSystemError(f"User id is immutable: {self.id} -> {id}")
        self.id = id

    def tenant_of(self) -> int | None:
        return self.tenant_id

    def to_wire(self) -> dict[str, t.Any]:
        '''External representation. The credential never leaves the service'''
        return self.model_dump(mode='json', by_alias=True, exclude={'local_passwd'})
