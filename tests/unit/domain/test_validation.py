import pytest
import admin_api.domain.models as dmod
import admin_api.domain.validation as v
import admin_api.infrastructure.security as security
import tests.mocks as mocks
from tests.helpers.users import make_user


@pytest.fixture
def store() -> mocks.FakeLookupStore:
    return mocks.FakeLookupStore({
        ('role', 'id'): {0: 0, 1: 1},
        ('tenant', 'id'): {1: 1, 2: 2},
        ('user', 'username'): {'taken': 40},
        ('user', 'email'): {'taken@yoyodyne.bz': 40},
    })


@pytest.fixture
def validator(store) -> v.UserValidator:
    return v.UserValidator(store, security.StaticDenyList({'password1'}))


def as_pairs(errors: list[v.FieldError]) -> list[tuple[str, str]]:
    return [(e.field, e.message) for e in errors]


@pytest.mark.asyncio
async def test_valid_user_has_no_errors(validator):
    assert await validator.validate(make_user()) == []


@pytest.mark.asyncio
async def test_empty_user_reports_every_field_once(validator):
    errors = await validator.validate(dmod.User())
    assert as_pairs(errors) == [
        ('email', 'cannot be blank'),
        ('fullName', 'cannot be blank'),
        ('localPasswd', 'cannot be blank'),
        ('role', 'cannot be blank'),
        ('username', 'cannot be blank'),
        ('tenantId', 'cannot be blank'),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field, wire_name",
    [
        ('email', 'email'),
        ('full_name', 'fullName'),
        ('local_passwd', 'localPasswd'),
        ('role', 'role'),
        ('username', 'username'),
        ('tenant_id', 'tenantId'),
    ]
)
async def test_missing_field_is_attributed_to_that_field(validator, field, wire_name):
    errors = await validator.validate(make_user(**{field: None}))
    assert as_pairs(errors) == [(wire_name, 'cannot be blank')]


@pytest.mark.asyncio
async def test_empty_string_is_blank(validator):
    errors = await validator.validate(make_user(full_name=''))
    assert as_pairs(errors) == [('fullName', 'cannot be blank')]


@pytest.mark.asyncio
async def test_role_zero_is_a_value(validator):
    assert await validator.validate(make_user(role=0)) == []


@pytest.mark.asyncio
async def test_bad_email(validator):
    errors = await validator.validate(make_user(email='not-an-address'))
    assert as_pairs(errors) == [('email', 'must be a valid email address')]


@pytest.mark.asyncio
async def test_short_password(validator):
    errors = await validator.validate(make_user(local_passwd='short'))
    assert as_pairs(errors) == [('localPasswd', 'must be at least 8 characters long')]


@pytest.mark.asyncio
@pytest.mark.parametrize("password_from", ['username', 'email'])
async def test_password_equal_to_own_identity_is_too_common(validator, password_from):
    user = make_user(username='longenoughname', email='longenough@yoyodyne.bz')
    user.local_passwd = getattr(user, password_from)
    errors = await validator.validate(user)
    assert ('localPasswd', 'password is too common') in as_pairs(errors)


@pytest.mark.asyncio
async def test_short_password_equal_to_username_reports_both(validator):
    errors = await validator.validate(make_user(username='bob', local_passwd='bob'))
    assert as_pairs(errors) == [
        ('localPasswd', 'must be at least 8 characters long'),
        ('localPasswd', 'password is too common'),
    ]


@pytest.mark.asyncio
async def test_deny_listed_password(validator):
    errors = await validator.validate(make_user(local_passwd='password1'))
    assert as_pairs(errors) == [('localPasswd', 'password is too common')]


@pytest.mark.asyncio
async def test_unknown_role_and_tenant(validator):
    errors = await validator.validate(make_user(role=9, tenant_id=9))
    assert as_pairs(errors) == [('role', 'does not exist'), ('tenantId', 'does not exist')]


@pytest.mark.asyncio
async def test_taken_username_and_email(validator):
    errors = await validator.validate(make_user(username='taken', email='taken@yoyodyne.bz'))
    assert as_pairs(errors) == [('email', 'already exists'), ('username', 'already exists')]


@pytest.mark.asyncio
async def test_own_username_and_email_are_not_taken(validator):
    user = make_user(id=40, username='taken', email='taken@yoyodyne.bz')
    assert await validator.validate(user) == []


@pytest.mark.asyncio
async def test_validation_does_not_touch_the_record(validator):
    user = make_user(local_passwd='short')
    before = user.model_dump()
    await validator.validate(user)
    assert user.model_dump() == before


def test_field_error_rendering():
    assert str(v.FieldError('email', 'cannot be blank')) == "'email' cannot be blank"
