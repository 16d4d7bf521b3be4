import pydantic as p


class Tenant(p.BaseModel):
    id: int | None = None
    name: str
    active: bool = True
    parent_id: int | None = None
