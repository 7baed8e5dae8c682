"""
Spot Configuration - All constants and settings.
"""
import os
import sys
from pathlib import Path

# ============================================
# NETWORK ENDPOINTS
# ============================================

SPOTIFY_API_URL = os.environ.get('SPOTIFY_API_URL', 'https://api.spotify.com/v1')

# Playback backend position events (empty = listener disabled)
SPOT_EVENTS_WS = os.environ.get('SPOT_EVENTS_WS', '')

API_TIMEOUT = 5  # seconds
RECONNECT_DELAY = 1.0  # seconds between websocket reconnects

# ============================================
# PATHS
# ============================================

CONFIG_DIR = Path(os.environ.get('SPOT_CONFIG_DIR', Path.home() / '.config' / 'spot'))
CREDENTIALS_PATH = CONFIG_DIR / 'credentials.json'

# Logging directory
LOG_DIR = CONFIG_DIR / 'logs'
LOG_FILE = LOG_DIR / 'spot.log'
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB per file
LOG_BACKUP_COUNT = 5

# ============================================
# COMMAND LINE FLAGS
# ============================================

MOCK_MODE = '--mock' in sys.argv or '-m' in sys.argv

# ============================================
# BROWSER
# ============================================

BROWSER_PAGE_SIZE = 20
