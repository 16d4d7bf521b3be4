import pytest
import datetime as dt
import admin_api.application.exceptions as appexc
import admin_api.infrastructure.security as security
from tests.helpers.tokens import make_token

SECRET = 'test-secret'


@pytest.fixture
def resolver() -> security.JWTCurrentUserResolver:
    return security.JWTCurrentUserResolver(jwt_secret=SECRET, algorithm='HS256')


def test_resolves_current_user(resolver):
    user = resolver.resolve(make_token(7, 'buckaroo', 2, secret=SECRET))
    assert user.id == 7
    assert user.username == 'buckaroo'
    assert user.tenant_id == 2


def test_tenant_is_optional(resolver):
    assert resolver.resolve(make_token(7, 'buckaroo', None, secret=SECRET)).tenant_id is None


def test_expired_token(resolver):
    token = make_token(7, 'buckaroo', 2, expires_in=dt.timedelta(minutes=-5), secret=SECRET)
    with pytest.raises(appexc.TokenExpiredException):
        resolver.resolve(token)


@pytest.mark.parametrize(
    "token",
    [
        'not.a.token',
        make_token(7, 'buckaroo', 2, secret='another-secret'),
        make_token('not-a-number', 'buckaroo', 2, secret=SECRET),
    ]
)
def test_invalid_tokens(resolver, token):
    with pytest.raises(appexc.CredentialsException):
        resolver.resolve(token)
