from admin_api.common.exceptions import AppBaseException

class CustomStorageException(AppBaseException):
    """Base for exceptions raised manually in storage services"""

### Databases
class DatabaseException(CustomStorageException): ...

class UnknownLookupTarget(DatabaseException):
    """A uniqueness/existence check named an entity or a field the lookup store doesn't know about"""

### Startup
class StorageBootError(CustomStorageException):
    '''Storage service failed to boot within given time'''

class StorageNotInitialized(CustomStorageException):
    '''Storage service has been booted successfully, yet seems not to be initialized entirely'''
