import json
import asyncio
import logging
from pathlib import Path
from typing import List, Dict, Any, Optional
from datetime import datetime
import aiosqlite

logger = logging.getLogger(__name__)


class DatabaseService:
    def __init__(self, db_path: str = "bot_data.db"):
        self.db_path = db_path
        self._lock = asyncio.Lock()

    async def initialize(self):
        """Initialize database tables"""
        async with self._lock:
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute('''
                    CREATE TABLE IF NOT EXISTS tracked_accounts (
                        platform TEXT NOT NULL,
                        username TEXT NOT NULL,
                        display_name TEXT NOT NULL,
                        resolved_id TEXT,
                        added_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                        PRIMARY KEY (platform, username)
                    )
                ''')
                await db.commit()

    def _dict_factory(self, cursor, row):
        """Custom row factory that handles datetime conversion"""
        d = {}
        for idx, col in enumerate(cursor.description):
            value = row[idx]
            if col[0] == 'added_at' and value is not None:
                try:
                    d[col[0]] = datetime.fromisoformat(value)
                except (ValueError, TypeError):
                    d[col[0]] = None
            else:
                d[col[0]] = value
        return d

    async def add_tracked_account(self, account: Dict[str, Any]) -> bool:
        """Insert an account; returns False when the (platform, username) key exists"""
        async with self._lock:
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute('''
                    INSERT OR IGNORE INTO tracked_accounts (
                        platform, username, display_name, resolved_id, added_at
                    )
                    VALUES (?, ?, ?, ?, ?)
                ''', (
                    account['platform'],
                    account['username'],
                    account['display_name'],
                    account.get('resolved_id'),
                    (account.get('added_at') or datetime.now()).isoformat(sep=' ', timespec='seconds')
                ))
                await db.commit()
                return cursor.rowcount > 0

    async def get_tracked_account(self, platform: str, username: str) -> Optional[Dict[str, Any]]:
        async with self._lock:
            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = self._dict_factory
                async with db.execute('''
                    SELECT * FROM tracked_accounts
                    WHERE platform = ? AND username = ?
                ''', (platform, username)) as cursor:
                    return await cursor.fetchone()

    async def get_all_tracked_accounts(self) -> List[Dict[str, Any]]:
        async with self._lock:
            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = self._dict_factory
                async with db.execute('''
                    SELECT * FROM tracked_accounts
                    ORDER BY added_at, platform, username
                ''') as cursor:
                    return list(await cursor.fetchall())

    async def delete_tracked_account(self, platform: str, username: str) -> bool:
        async with self._lock:
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute('''
                    DELETE FROM tracked_accounts
                    WHERE platform = ? AND username = ?
                ''', (platform, username))
                await db.commit()
                return cursor.rowcount > 0

    async def import_legacy_json(self, data_file: str) -> int:
        """Import a ``monitored_users.json`` list of ``[key, user]`` pairs.

        Accounts already present are left alone. Returns how many were added.
        """
        path = Path(data_file)
        if not path.exists():
            return 0

        try:
            entries = json.loads(path.read_text(encoding='utf-8'))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read legacy data file {path}: {e}")
            return 0

        imported = 0
        for _, user in entries:
            added_at = user.get('addedAt')
            account = {
                'platform': user['platform'],
                'username': user['username'],
                'display_name': user.get('displayName') or user['username'],
                'resolved_id': user.get('resolvedId'),
                'added_at': datetime.fromisoformat(added_at.replace('Z', '+00:00')) if added_at else None,
            }
            if await self.add_tracked_account(account):
                imported += 1

        logger.info(f"Imported {imported} tracked accounts from {path}")
        return imported
