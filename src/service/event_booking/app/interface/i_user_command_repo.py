from abc import ABC, abstractmethod

from src.service.event_booking.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    @abstractmethod
    async def create(self, user_entity: UserEntity) -> UserEntity:
        """
        Raises:
            ConflictError: email already registered
        """
        pass
