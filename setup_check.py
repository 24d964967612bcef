"""Check that the environment is ready before starting the bot.

Usage: ``python setup_check.py``. Exits with status 1 when a required
variable is missing.
"""
import sys
from pathlib import Path

import requests

from services.config_manager import ConfigManager

REQUIRED_VARS = ['DISCORD_TOKEN', 'DISCORD_CLIENT_ID', 'WEBHOOK_URL']
OPTIONAL_VARS = ['YOUTUBE_API_KEY', 'TWITCH_CLIENT_ID', 'TWITCH_CLIENT_SECRET']


def _preview(value: str) -> str:
    return f"{value[:10]}..."


def check_variables(config: ConfigManager) -> bool:
    ok = True
    print("Required Variables:")
    for name in REQUIRED_VARS:
        value = config.get(name)
        if value:
            print(f"✓ {name}: {_preview(value)}")
        else:
            print(f"❌ {name}: NOT SET")
            ok = False

    print("\nOptional Variables:")
    for name in OPTIONAL_VARS:
        value = config.get(name)
        if value:
            print(f"✓ {name}: {_preview(value)}")
        else:
            print(f"⚠️  {name}: NOT SET")
    return ok


def check_webhook(url: str, timeout: float = 10) -> bool:
    """A Discord webhook URL answers GET with the webhook's details"""
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        print(f"❌ Webhook unreachable: {e}")
        return False

    if response.status_code != 200:
        print(f"❌ Webhook returned HTTP {response.status_code}")
        return False

    print(f"✓ Webhook found: {response.json().get('name', 'unnamed')}")
    return True


def main() -> int:
    print("🔍 Environment Setup Check\n")
    config = ConfigManager()
    ok = check_variables(config)

    if config.webhook_url:
        print()
        check_webhook(config.webhook_url)

    print("\n📋 Setup Instructions:")
    print("1. Make sure you have a .env file in your project root")
    print("2. Copy the contents from .env.example to .env")
    print("3. Fill in your actual tokens and API keys")
    print("4. Run: python main.py")

    if Path('.env').exists():
        print("\n✓ .env file found")
    else:
        print("\n❌ .env file not found! Please create one based on .env.example")

    return 0 if ok else 1


if __name__ == '__main__':
    sys.exit(main())
