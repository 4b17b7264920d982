from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthenticationError, ForbiddenError
from src.service.event_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.event_booking.driving_adapter.http_controller.auth.current_user_info import (
    CurrentUserInfo,
)
from src.service.event_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class RoleAuthStrategy:
    @staticmethod
    def is_admin(user: UserEntity) -> bool:
        return user.role == UserRole.ADMIN

    @staticmethod
    def can_manage_events(user: UserEntity) -> bool:
        return user.role == UserRole.ADMIN

    @staticmethod
    def can_create_booking(user: UserEntity) -> bool:
        return user.role in (UserRole.USER, UserRole.ADMIN)


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
) -> UserEntity:
    """Stateless: the user is rebuilt from the JWT cookie, no DB query."""
    return jwt_auth.get_current_user_info_from_jwt(token)


async def require_user(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_user',
        attributes={
            'user.id': str(current_user.id),
            'user.role': current_user.role.value,
        },
    ):
        if not RoleAuthStrategy.can_create_booking(current_user):
            raise ForbiddenError('Only registered users can perform this action')
        return current_user


async def require_admin(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={
            'user.id': str(current_user.id),
            'user.role': current_user.role.value,
        },
    ):
        if not RoleAuthStrategy.is_admin(current_user):
            raise ForbiddenError('Only admins can perform this action')
        return current_user


def _to_user_info(current_user: UserEntity) -> CurrentUserInfo:
    if current_user.id is None:
        raise AuthenticationError('User ID is missing')
    return CurrentUserInfo(user_id=current_user.id, role=current_user.role)


async def require_user_info(current_user: UserEntity = Depends(require_user)) -> CurrentUserInfo:
    return _to_user_info(current_user)


async def require_admin_info(
    current_user: UserEntity = Depends(require_admin),
) -> CurrentUserInfo:
    return _to_user_info(current_user)
