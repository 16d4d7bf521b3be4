from enum import Enum
from admin_api.common.exceptions import AppBaseException

class DomainLayerException(AppBaseException):
    '''Base for domain layer'''



### Access related
class AccessException(AppBaseException):
    '''Base for all exceptions related to access issues'''

class ResourceNotAuthorized(AccessException):
    """Raised when the acting user's tenant does not contain the resource's tenant"""

### Model related
class ModelIntegrityError:
    '''Base for integrity violation exceptons. Use as adapter for repositories' integrity exceptions'''
    def __init__(self, *args, orig: Exception|None = None):
        super().__init__(*args)
        self.orig = orig


####### Resources

class ApiErrorType(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    MISSING = "missing"
    SYSTEM = "system"


class ResourceException(DomainLayerException):
    '''Base for every failed resource operation. `kind` tells the caller which of the API error kinds it is'''
    kind: ApiErrorType = ApiErrorType.SYSTEM


class ResourceValidationError(ResourceException):
    '''One or more field rules failed. Storage was not touched'''
    kind = ApiErrorType.VALIDATION

    def __init__(self, errors: list):
        super().__init__("; ".join(str(e) for e in errors))
        self.errors = errors


class ResourceConflict(ModelIntegrityError, ResourceException):
    '''Storage rejected the write because of a unique constraint'''
    kind = ApiErrorType.CONFLICT

    def __init__(self, *args, field: str|None = None, orig: Exception|None = None):
        super().__init__(*args, orig=orig)
        self.field = field


class ResourceMissing(ResourceException):
    '''Target of an update/delete does not exist'''
    kind = ApiErrorType.MISSING


class ResourceSystemError(ModelIntegrityError, ResourceException):
    '''Any other storage, hashing or integrity failure. Message is not meant for the caller'''
    kind = ApiErrorType.SYSTEM
