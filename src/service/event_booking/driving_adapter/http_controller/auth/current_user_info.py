import attrs

from src.service.event_booking.domain.entity.user_entity import UserRole


@attrs.define(frozen=True)
class CurrentUserInfo:
    """Authenticated caller for controllers; user_id is always a persisted id"""

    user_id: int
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
