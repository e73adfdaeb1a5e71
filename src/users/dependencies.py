from typing import Callable
from fastapi import Depends, HTTPException, Security, status
from fastapi.security.api_key import APIKeyHeader

from src.users.constants import find_user
from src.users.schemas import User, UserRole


user_id_header = APIKeyHeader(name="x-user-id", auto_error=False)


def get_current_user(user_id: str | None = Security(user_id_header)) -> User:
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User id is missing",
        )

    user = find_user(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unknown user '{user_id}'",
        )

    return user


def require_roles(*roles: UserRole) -> Callable[[User], User]:
    """Build a dependency that only lets the given roles through.

    Administrators are always allowed.
    """
    allowed = {*roles, UserRole.ADMIN}

    def check_role(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{user.role.value}' is not allowed to perform this action",
            )
        return user

    return check_role
