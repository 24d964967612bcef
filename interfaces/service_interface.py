from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from models.tracked_account import TrackedAccount


class ITrackingService(ABC):
    """Interface for managing the list of tracked accounts"""

    @abstractmethod
    async def add_account(self, platform: str, username: str,
                          display_name: Optional[str] = None) -> Tuple[bool, str]:
        """Start tracking an account; returns success and a user-facing message"""
        pass

    @abstractmethod
    async def remove_account(self, platform: str, username: str) -> bool:
        """Stop tracking an account"""
        pass

    @abstractmethod
    async def list_accounts(self) -> List[Tuple[TrackedAccount, bool]]:
        """All tracked accounts with their current live flag"""
        pass
