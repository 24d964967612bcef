"""Markup heuristics used to tell whether a scraped channel page is live.

Every indicator is a named predicate over a parsed ``BeautifulSoup`` document.
A page counts as live when any indicator of the platform's list matches, and
``matched_indicators`` reports which ones did so drift in a platform's
markup can be traced back to a single predicate.
"""
from collections import namedtuple
from typing import Callable, List, Optional, Sequence

from bs4 import BeautifulSoup

LiveIndicator = namedtuple('LiveIndicator', ['name', 'check'])


def parse_markup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, 'html.parser')


def _lower(value: Optional[str]) -> str:
    return (value or '').lower()


def _meta_content(soup: BeautifulSoup, **attrs) -> str:
    tag = soup.find('meta', attrs=attrs)
    return _lower(tag.get('content')) if tag else ''


def _body_text(soup: BeautifulSoup) -> str:
    body = soup.body or soup
    return body.get_text(' ').lower()


def _script_text(soup: BeautifulSoup, **attrs) -> str:
    return ''.join(script.string or '' for script in soup.find_all('script', attrs=attrs))


def title_mentions_live(soup: BeautifulSoup) -> bool:
    return 'live' in _lower(soup.title.get_text() if soup.title else '')


def og_title_mentions_live(soup: BeautifulSoup) -> bool:
    return 'live' in _meta_content(soup, property='og:title')


def description_mentions_live(soup: BeautifulSoup) -> bool:
    return 'live' in _meta_content(soup, name='description')


def ld_json_mentions_live(soup: BeautifulSoup) -> bool:
    return 'live' in _script_text(soup, type='application/ld+json').lower()


def body_contains(phrase: str) -> Callable[[BeautifulSoup], bool]:
    def check(soup: BeautifulSoup) -> bool:
        return phrase in _body_text(soup)
    return check


def has_element(selector: str) -> Callable[[BeautifulSoup], bool]:
    def check(soup: BeautifulSoup) -> bool:
        return soup.select_one(selector) is not None
    return check


def live_and_room_classes(soup: BeautifulSoup) -> bool:
    return bool(soup.select('[class*="live"]')) and bool(soup.select('[class*="room"]'))


def video_with_live_text(soup: BeautifulSoup) -> bool:
    return soup.find('video') is not None and 'live' in _body_text(soup)


def script_livestream_flag(soup: BeautifulSoup) -> bool:
    scripts = _script_text(soup)
    return '"livestream"' in scripts and 'true' in scripts


TIKTOK_INDICATORS = (
    LiveIndicator('title', title_mentions_live),
    LiveIndicator('og_title', og_title_mentions_live),
    LiveIndicator('meta_description', description_mentions_live),
    LiveIndicator('ld_json', ld_json_mentions_live),
    LiveIndicator('live_room_class', has_element('.live-room')),
    LiveIndicator('live_room_e2e', has_element('[data-e2e="live-room"]')),
    LiveIndicator('live_stream_class', has_element('.live-stream')),
    LiveIndicator('live_stream_testid', has_element('[data-testid="live-stream"]')),
    LiveIndicator('body_is_live', body_contains('is live')),
    LiveIndicator('body_live_now', body_contains('live now')),
    LiveIndicator('live_container', has_element('.live-container')),
    LiveIndicator('live_and_room_classes', live_and_room_classes),
)

KICK_INDICATORS = (
    LiveIndicator('title', title_mentions_live),
    LiveIndicator('og_title', og_title_mentions_live),
    LiveIndicator('meta_description', description_mentions_live),
    LiveIndicator('live_indicator_class', has_element('.live-indicator')),
    LiveIndicator('live_indicator_testid', has_element('[data-testid="live-indicator"]')),
    LiveIndicator('livestream_container', has_element('.livestream-container')),
    LiveIndicator('body_is_live', body_contains('is live')),
    LiveIndicator('body_live_now', body_contains('live now')),
    LiveIndicator('video_with_live_text', video_with_live_text),
    LiveIndicator('script_livestream_flag', script_livestream_flag),
)


def matched_indicators(soup: BeautifulSoup, indicators: Sequence[LiveIndicator]) -> List[str]:
    return [indicator.name for indicator in indicators if indicator.check(soup)]


def is_live_markup(soup: BeautifulSoup, indicators: Sequence[LiveIndicator]) -> bool:
    return any(indicator.check(soup) for indicator in indicators)
