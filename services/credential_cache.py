import logging
from enum import Enum
from typing import Optional

import aiohttp

logger = logging.getLogger(__name__)

TWITCH_TOKEN_URL = 'https://id.twitch.tv/oauth2/token'


class TokenState(Enum):
    EMPTY = "empty"
    VALID = "valid"


class TokenAcquisitionError(Exception):
    """Raised when the client-credentials grant does not yield a token"""


class TwitchTokenCache:
    """Holds the Twitch app access token.

    The token is fetched lazily and kept until a Helix call rejects it; the
    caller then invalidates it and the next ``ensure_token`` fetches a new one.
    """

    def __init__(self, client_id: Optional[str], client_secret: Optional[str],
                 token_url: str = TWITCH_TOKEN_URL):
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self._token: Optional[str] = None

    @property
    def state(self) -> TokenState:
        return TokenState.VALID if self._token else TokenState.EMPTY

    @property
    def token(self) -> Optional[str]:
        return self._token

    async def ensure_token(self, session: aiohttp.ClientSession) -> str:
        if self._token:
            return self._token

        params = {
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'grant_type': 'client_credentials'
        }
        try:
            async with session.post(self.token_url, params=params) as response:
                if response.status != 200:
                    error_data = await response.text()
                    raise TokenAcquisitionError(f"Error getting Twitch token: {response.status} - {error_data}")
                data = await response.json()
        except aiohttp.ClientError as e:
            raise TokenAcquisitionError(f"Error getting Twitch token: {e}") from e

        token = data.get('access_token')
        if not token:
            raise TokenAcquisitionError("Twitch token response did not contain an access_token")

        self._token = token
        logger.info("Successfully acquired Twitch app access token")
        return token

    def invalidate(self) -> None:
        if self._token:
            logger.info("Twitch token rejected, it will be re-acquired on next use")
        self._token = None
