from typing import Dict, List, Optional, Tuple
from interfaces.service_interface import ITrackingService
from interfaces.repository_interface import IAccountRepository
from models.tracked_account import Platform, TrackedAccount, account_key
from platforms.base_platform import BasePlatform
from services.live_status_tracker import LiveStatusTracker
from services.logging_service import LoggingService
from utils.validators import UsernameValidator


class TrackingService(ITrackingService):
    """Service for managing tracked accounts"""

    def __init__(self, repository: IAccountRepository,
                 tracker: LiveStatusTracker,
                 platforms: Dict[Platform, BasePlatform],
                 logging_service: LoggingService):
        self.repository = repository
        self.tracker = tracker
        self.platforms = platforms
        self.logging_service = logging_service

    async def add_account(self, platform: str, username: str,
                          display_name: Optional[str] = None) -> Tuple[bool, str]:
        """Add new account to monitoring"""
        try:
            platform = Platform(platform.lower())
        except ValueError:
            return False, f"Unsupported platform: {platform}"

        username = UsernameValidator.normalize(platform, username)
        is_valid, message = UsernameValidator.validate_username(platform, username)
        if not is_valid:
            return False, message

        display_name = display_name or username

        if await self.repository.get(platform, username):
            return False, f"{username} on {platform.value} is already being monitored!"

        checker = self.platforms.get(platform)
        if not checker:
            return False, "Unsupported platform"

        validation = await checker.validate_user(username)
        if not validation.valid:
            return False, validation.message

        account = TrackedAccount(
            platform=platform,
            username=username,
            display_name=display_name,
            resolved_id=validation.resolved_id
        )
        if not await self.repository.save(account):
            return False, f"{username} on {platform.value} is already being monitored!"

        await self.logging_service.log_info(f"Now monitoring {display_name} ({account.key})")
        message = f"Now monitoring **{display_name}** on {platform.value}!"
        if validation.note:
            message += f"\n{validation.note}"
        return True, message

    async def remove_account(self, platform: str, username: str) -> bool:
        """Remove account from monitoring"""
        platform = Platform(platform.lower())
        username = UsernameValidator.normalize(platform, username)

        deleted = await self.repository.delete(platform, username)
        if deleted:
            self.tracker.forget(account_key(platform, username))
            await self.logging_service.log_info(f"Stopped monitoring {account_key(platform, username)}")
        return deleted

    async def list_accounts(self) -> List[Tuple[TrackedAccount, bool]]:
        accounts = await self.repository.get_all()
        return [(account, self.tracker.is_live(account.key)) for account in accounts]
