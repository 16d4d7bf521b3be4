from admin_api.domain.repositories.resources import IResourceRepository
import admin_api.domain.models.users as domain


class IUserRepository(IResourceRepository[domain.User]):
    """Abstract base for UserRepository. Specific implementations must inherit this base class."""
