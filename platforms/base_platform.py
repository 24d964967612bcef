from abc import ABC, abstractmethod
from typing import Optional

import aiohttp

from models.tracked_account import Platform, ValidationResult


class BasePlatform(ABC):
    platform: Platform

    def __init__(self, session: Optional[aiohttp.ClientSession] = None, timeout: float = 15):
        self.session = session
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def ensure_session(self) -> aiohttp.ClientSession:
        """Ensures aiohttp session exists"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self.session

    @abstractmethod
    async def is_stream_live(self, identity: str) -> bool:
        """Check if the account behind ``identity`` is streaming right now"""

    async def validate_user(self, username: str) -> ValidationResult:
        """Check that a username can be tracked before it is stored"""
        return ValidationResult(valid=True, message=f"{self.platform.label} user added")

    async def close(self) -> None:
        """Close the aiohttp session"""
        if self.session and not self.session.closed:
            await self.session.close()
