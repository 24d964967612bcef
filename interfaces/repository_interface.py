from abc import ABC, abstractmethod
from typing import List, Optional

from models.tracked_account import Platform, TrackedAccount


class IAccountRepository(ABC):
    """Interface for tracked account storage"""

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the underlying storage"""
        pass

    @abstractmethod
    async def save(self, account: TrackedAccount) -> bool:
        """Store a new account; False if its key is already tracked"""
        pass

    @abstractmethod
    async def get(self, platform: Platform, username: str) -> Optional[TrackedAccount]:
        """Get a tracked account"""
        pass

    @abstractmethod
    async def get_all(self) -> List[TrackedAccount]:
        """Get all tracked accounts"""
        pass

    @abstractmethod
    async def delete(self, platform: Platform, username: str) -> bool:
        """Delete a tracked account; False if it was not tracked"""
        pass
