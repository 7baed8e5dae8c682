"""
Credential Store - Persists login credentials as JSON.

save() is best-effort: it reports failure through its return value
and the caller is free to ignore it.
"""
import os
import json
import logging
import threading
from pathlib import Path
from typing import Optional

from ..models import Credentials

logger = logging.getLogger(__name__)


class CredentialStore:
    """Reads and writes credentials.json (owner-only permissions)."""
    
    def __init__(self, path: Path):
        self.path = path
        self._lock = threading.Lock()
    
    def load(self) -> Optional[Credentials]:
        """Load stored credentials, or None if missing or unreadable."""
        with self._lock:
            if not self.path.exists():
                logger.debug(f'No credentials at {self.path}')
                return None
            try:
                data = json.loads(self.path.read_text())
                return Credentials.from_dict(data)
            except json.JSONDecodeError as e:
                logger.warning(f'Invalid JSON in credentials file: {e}')
                return None
            except ValueError as e:
                logger.warning(f'Incomplete credentials file: {e}')
                return None
            except (IOError, OSError) as e:
                logger.error(f'Cannot read credentials file: {e}', exc_info=True)
                return None
    
    def save(self, credentials: Credentials) -> bool:
        """Write credentials atomically. Returns False on failure."""
        with self._lock:
            tmp_path = self.path.with_suffix('.tmp')
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                if tmp_path.exists():
                    tmp_path.unlink()  # Stale tmp may have a wider mode
                # Owner-only from creation
                fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
                with os.fdopen(fd, 'w') as f:
                    json.dump(credentials.to_dict(), f, indent=2)
                tmp_path.replace(self.path)
                logger.info(f'Saved credentials for {credentials.username}')
                return True
            except (IOError, OSError) as e:
                logger.error(f'Error saving credentials: {e}', exc_info=True)
                try:
                    tmp_path.unlink()
                except OSError:
                    pass
                return False
    
    def clear(self) -> bool:
        """Delete stored credentials. Returns False on failure."""
        with self._lock:
            try:
                if self.path.exists():
                    self.path.unlink()
                    logger.info('Cleared stored credentials')
                return True
            except (IOError, OSError) as e:
                logger.error(f'Error clearing credentials: {e}', exc_info=True)
                return False
