"""Process-wide flags: theme, premium, and the background session timeout."""

import time
from typing import Optional

from flask import current_app

from tabletop import storage
from tabletop.services.games.registry import storage_keys

THEME_KEY = 'appTheme'
PREMIUM_KEY = 'isPremium'
BACKGROUND_TIME_KEY = 'appBackgroundTime'

LIGHT_THEME = {
    'dark': False,
    'colors': {
        'primary': '#007AFF',
        'background': '#fff',
        'surface': '#f5f5f5',
        'text': '#333',
        'textSecondary': '#666',
        'textTertiary': '#999',
        'border': '#e0e0e0',
        'danger': '#FF3B30',
        'success': '#34C759',
        'warning': '#FF9500',
        'card': '#f9f9f9',
        'overlay': 'rgba(0, 0, 0, 0.5)',
    },
}

DARK_THEME = {
    'dark': True,
    'colors': {
        'primary': '#0A84FF',
        'background': '#000',
        'surface': '#1C1C1E',
        'text': '#FFFFFF',
        'textSecondary': '#A9A9AF',
        'textTertiary': '#8E8E93',
        'border': '#424245',
        'danger': '#FF453A',
        'success': '#30B0C0',
        'warning': '#FF9500',
        'card': '#2C2C2E',
        'overlay': 'rgba(0, 0, 0, 0.8)',
    },
}


def _flag(key: str) -> bool:
    value = storage.load_json(key, False)
    return value if isinstance(value, bool) else False


def is_dark_mode() -> bool:
    return _flag(THEME_KEY)


def set_dark_mode(enabled: bool) -> bool:
    storage.save_json(THEME_KEY, bool(enabled))
    return bool(enabled)


def theme_payload(dark: bool) -> dict:
    return {'isDarkMode': dark, 'theme': DARK_THEME if dark else LIGHT_THEME}


def is_premium() -> bool:
    return _flag(PREMIUM_KEY)


def toggle_premium() -> bool:
    status = not is_premium()
    storage.save_json(PREMIUM_KEY, status)
    return status


def _now_ms(now_ms: Optional[int]) -> int:
    return int(time.time() * 1000) if now_ms is None else now_ms


def mark_background(now_ms: Optional[int] = None) -> int:
    stamp = _now_ms(now_ms)
    storage.set_item(BACKGROUND_TIME_KEY, str(stamp))
    return stamp


def resume(now_ms: Optional[int] = None) -> dict:
    """Clear all game data if the app sat in the background past the timeout."""
    raw = storage.get_item(BACKGROUND_TIME_KEY)
    if raw is None:
        return {'cleared': False, 'away_ms': None}
    try:
        away_ms = _now_ms(now_ms) - int(raw)
    except ValueError:
        current_app.logger.error(f"[session] bad {BACKGROUND_TIME_KEY} value: {raw!r}")
        return {'cleared': False, 'away_ms': None}
    timeout_ms = int(current_app.config.get('SESSION_TIMEOUT_SEC', 1800)) * 1000
    cleared = away_ms > timeout_ms
    if cleared:
        storage.multi_remove(storage_keys())
        current_app.logger.info(f"[session-expired] away={away_ms}ms timeout={timeout_ms}ms; game data cleared")
    return {'cleared': cleared, 'away_ms': away_ms}
