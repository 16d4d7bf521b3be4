from abc import ABC, abstractmethod
import typing as t

if t.TYPE_CHECKING:
    from admin_api.domain.models.users import CurrentUser
    from admin_api.domain.repositories.tenants import ITenantRepository


class IIdentifiable(ABC):
    """Identity part of the resource contract. Every resource exposed through the CRUD engine implements it."""

    @abstractmethod
    def identity(self) -> tuple[int, bool]:
        '''Returns (id, present). present is False until storage has assigned an id'''

    @abstractmethod
    def audit_label(self) -> str:
        '''Human readable label, for diagnostics only'''

    @abstractmethod
    def type_name(self) -> str: ...

    @abstractmethod
    def set_identity(self, id: int) -> None:
        '''Called once by Create, after storage assigns the id'''


class ITenantScoped(ABC):
    """Tenant part of the resource contract"""

    @abstractmethod
    def tenant_of(self) -> int | None: ...

    async def is_authorized(self, current_user: "CurrentUser", tenants: "ITenantRepository") -> bool:
        """Resource is authorized iff its tenant is the acting user's tenant or one of its descendants.
        A resource without a tenant is never authorized. Storage failures propagate as exceptions.
        """
        tenant_id = self.tenant_of()
        if tenant_id is None:
            return False
        return await tenants.is_resource_authorized(tenant_id, current_user)
