from uuid import UUID

from pydantic import BaseModel


class CallerContext(BaseModel):
    """
    Who is calling, as resolved by the identity provider.

    Trusted once validated at the HTTP boundary; use cases only enforce
    tenant and role rules on top of it.
    """

    user_id: UUID
    tenant_id: UUID
    is_admin: bool = False
