from blog_api.domains.identity.entities import User, UserSummary, ROLE_ADMIN, ROLE_USER
from blog_api.domains.identity.schemas import (
    UserCreate, UserLogin, UserUpdate, UserResponse, UserSummaryResponse, AuthPayload
)

__all__ = [
    "User", "UserSummary", "ROLE_ADMIN", "ROLE_USER",
    "UserCreate", "UserLogin", "UserUpdate",
    "UserResponse", "UserSummaryResponse", "AuthPayload"
]
