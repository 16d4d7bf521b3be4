from abc import abstractmethod, ABC
import admin_api.domain.models as domain


class ITenantRepository(ABC):
    """Tenant hierarchy lookups used by authorization and read scoping"""

    @abstractmethod
    async def is_resource_authorized(self, tenant_id: int, current_user: domain.CurrentUser) -> bool:
        '''True iff tenant_id is the current user's tenant or one of its descendants'''

    @abstractmethod
    async def visible_tenant_ids(self, current_user: domain.CurrentUser) -> list[int]: ...

    @abstractmethod
    async def get_by_id(self, tenant_id: int) -> domain.Tenant | None: ...
