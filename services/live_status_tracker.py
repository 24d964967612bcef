from enum import Enum
from typing import Dict, List


class Transition(Enum):
    WENT_LIVE = "went_live"
    WENT_OFFLINE = "went_offline"
    UNCHANGED = "unchanged"


class LiveStatusTracker:
    """Last known live state per tracked account.

    State lives in memory only, so after a restart every account starts as
    offline and the first poll of a stream that is already live records it
    without announcing it.
    """

    def __init__(self):
        self._live: Dict[str, bool] = {}

    def evaluate(self, key: str, observed_live: bool) -> Transition:
        was_live = self._live.get(key, False)

        if observed_live and not was_live:
            self._live[key] = True
            return Transition.WENT_LIVE
        if not observed_live and was_live:
            self._live[key] = False
            return Transition.WENT_OFFLINE
        return Transition.UNCHANGED

    def record(self, key: str, observed_live: bool) -> None:
        """Store an observation as the baseline without reporting a transition"""
        self._live[key] = observed_live

    def is_live(self, key: str) -> bool:
        return self._live.get(key, False)

    def forget(self, key: str) -> None:
        self._live.pop(key, None)

    def live_keys(self) -> List[str]:
        return [key for key, live in self._live.items() if live]

    def __contains__(self, key: str) -> bool:
        return key in self._live
