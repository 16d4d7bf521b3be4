from abc import ABC, abstractmethod
import dataclasses as dc
import typing as t

import email_validator

import admin_api.domain.models as domain
import admin_api.domain.repositories as repos
import admin_api.domain.services as domsvc

R = t.TypeVar("R")


@dc.dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def __str__(self) -> str:
        return f"'{self.field}' {self.message}"


def is_empty(value: t.Any) -> bool:
    return value is None or value == ""


class Rule(ABC):
    """A single check on a single field value. Returns an error message or None.
    Rules with skip_empty=True are not applied to empty values, so that a missing field only reports 'cannot be blank'.
    """
    skip_empty: bool = True

    @abstractmethod
    async def check(self, value: t.Any) -> str | None: ...


class Required(Rule):
    skip_empty = False

    async def check(self, value):
        return "cannot be blank" if is_empty(value) else None


class IsEmail(Rule):
    async def check(self, value):
        if not isinstance(value, str):
            return "must be a valid email address"
        try:
            email_validator.validate_email(value, check_deliverability=False)
        except email_validator.EmailNotValidError:
            return "must be a valid email address"
        return None


class MinLength(Rule):
    def __init__(self, length: int):
        self.length = length

    async def check(self, value):
        if len(value) < self.length:
            return f"must be at least {self.length} characters long"
        return None


class GoodPassword(Rule):
    """Rejects passwords equal to one of the caller-supplied words (e.g. own username/email) or found in the deny-list"""

    def __init__(self, disallowed: t.Iterable[str | None], deny_list: domsvc.IPasswordDenyList):
        self.disallowed = [word for word in disallowed if word is not None]
        self.deny_list = deny_list

    async def check(self, value):
        if value in self.disallowed or value in await self.deny_list.entries():
            return "password is too common"
        return None


class Unique(Rule):
    def __init__(self, store: repos.ILookupStore, entity: str, field: str, exclude_id: int | None = None):
        self.store = store
        self.entity = entity
        self.field = field
        self.exclude_id = exclude_id

    async def check(self, value):
        if not await self.store.is_unique(self.entity, self.field, value, exclude_id=self.exclude_id):
            return "already exists"
        return None


class Exists(Rule):
    def __init__(self, store: repos.ILookupStore, entity: str, field: str = 'id'):
        self.store = store
        self.entity = entity
        self.field = field

    async def check(self, value):
        if not await self.store.exists(self.entity, self.field, value):
            return "does not exist"
        return None


async def run_rules(fields: t.Sequence[tuple[str, t.Any, t.Sequence[Rule]]]) -> list[FieldError]:
    """Runs every applicable rule of every field, in order. Never stops at the first failure."""
    errors: list[FieldError] = []
    for name, value, rules in fields:
        for rule in rules:
            if rule.skip_empty and is_empty(value):
                continue
            message = await rule.check(value)
            if message:
                errors.append(FieldError(name, message))
    return errors


class IValidator(ABC, t.Generic[R]):
    @abstractmethod
    async def validate(self, record: R) -> list[FieldError]:
        '''Read-only check of a candidate record against current storage state. Must not mutate the record'''


class UserValidator(IValidator[domain.User]):
    def __init__(self, store: repos.ILookupStore, deny_list: domsvc.IPasswordDenyList, min_password_length: int = 8):
        self._store = store
        self._deny_list = deny_list
        self._min_password_length = min_password_length

    async def validate(self, user: domain.User) -> list[FieldError]:
        own_id = user.id
        return await run_rules([
            ('email', user.email, [Required(), IsEmail(), Unique(self._store, 'user', 'email', own_id)]),
            ('fullName', user.full_name, [Required()]),
            ('localPasswd', user.local_passwd, [
                Required(),
                MinLength(self._min_password_length),
                GoodPassword([user.username, user.email], self._deny_list),
            ]),
            ('role', user.role, [Required(), Exists(self._store, 'role')]),
            ('username', user.username, [Required(), Unique(self._store, 'user', 'username', own_id)]),
            ('tenantId', user.tenant_id, [Required(), Exists(self._store, 'tenant')]),
        ])
