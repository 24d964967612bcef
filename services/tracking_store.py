from typing import Any, Dict, List, Optional

from interfaces.repository_interface import IAccountRepository
from models.tracked_account import Platform, TrackedAccount
from services.database_service import DatabaseService


class TrackingStore(IAccountRepository):
    """Tracked accounts persisted through the SQLite database service"""

    def __init__(self, db_service: DatabaseService):
        self.db_service = db_service

    async def initialize(self) -> None:
        await self.db_service.initialize()

    async def save(self, account: TrackedAccount) -> bool:
        return await self.db_service.add_tracked_account({
            'platform': account.platform.value,
            'username': account.username,
            'display_name': account.display_name,
            'resolved_id': account.resolved_id,
            'added_at': account.added_at,
        })

    async def get(self, platform: Platform, username: str) -> Optional[TrackedAccount]:
        row = await self.db_service.get_tracked_account(Platform(platform).value, username)
        return self._to_account(row) if row else None

    async def get_all(self) -> List[TrackedAccount]:
        rows = await self.db_service.get_all_tracked_accounts()
        return [self._to_account(row) for row in rows]

    async def delete(self, platform: Platform, username: str) -> bool:
        return await self.db_service.delete_tracked_account(Platform(platform).value, username)

    @staticmethod
    def _to_account(row: Dict[str, Any]) -> TrackedAccount:
        fields = {
            'platform': Platform(row['platform']),
            'username': row['username'],
            'display_name': row['display_name'],
            'resolved_id': row.get('resolved_id'),
        }
        if row.get('added_at'):
            fields['added_at'] = row['added_at']
        return TrackedAccount(**fields)
