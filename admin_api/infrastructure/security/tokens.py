import admin_api.application.exceptions as appexc
import admin_api.domain.models as mdom
from admin_api.infrastructure.telemetry.traces import TracerType
from admin_api.common.config import Config

import pydantic as p
import typing as t
import jwt


class JWTCurrentUserResolver:
    """Decodes a bearer token issued elsewhere into the acting user.
    Expected claims: sub (user id, as a string), username, tenant_id.
    """

    def __init__(self, jwt_secret: t.Optional[str] = None, algorithm: t.Optional[str] = None):
        self.jwt_secret = jwt_secret or Config.JWT_SECRET
        self.algorithm = algorithm or Config.ALGORITHM

    def __extract_token_data(self, token: str) -> dict[str, t.Any]:
        try:
            return jwt.decode(token, self.jwt_secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise appexc.TokenExpiredException() from e
        except jwt.InvalidTokenError as e:
            raise appexc.CredentialsException() from e

    @TracerType.traced
    def resolve(self, token: str) -> mdom.CurrentUser:
        data = self.__extract_token_data(token)
        try:
            return mdom.CurrentUser(
                id=int(data['sub']),
                username=data['username'],
                tenant_id=data.get('tenant_id'),
            )
        except (KeyError, TypeError, ValueError, p.ValidationError) as e:
            raise appexc.CredentialsException("Token does not carry a valid user") from e
