from admin_api.common.exceptions import AppBaseException

class ApplicationLayerException(AppBaseException):
    '''Base for application layer'''


### Auth
class AuthBaseException(ApplicationLayerException):
    '''Base for failures of resolving the acting user'''

class CredentialsException(AuthBaseException):
    def __init__(self, *args):
        super().__init__(*(args or ("Could not validate credentials",)))

class TokenExpiredException(AuthBaseException):
    def __init__(self, *args):
        super().__init__(*(args or ("Token has expired",)))
