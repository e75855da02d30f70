from pydantic import EmailStr

from app.models.user import UserRole
from app.schemas.common import ApiModel, UtcDatetime


class UserOut(ApiModel):
    id: str
    external_id: str
    email: EmailStr
    first_name: str
    last_name: str
    role: UserRole
    created_at: UtcDatetime | None = None


class RoleUpdate(ApiModel):
    role: UserRole
