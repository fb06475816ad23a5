"""
Side-channel artifact storage

Console messages and screenshots captured while tools run. The store lives
as long as the server process and is not tied to any browser session, so a
session reset or browser switch keeps what was captured before it.
"""

from .utils.logging_config import get_logger

logger = get_logger(__name__)


class ArtifactStore:
    """Console log entries plus screenshots keyed by caller-supplied name"""

    def __init__(self) -> None:
        self._console_logs: list[str] = []
        self._screenshots: dict[str, bytes] = {}
        # bumped on every store, so a replaced screenshot reads as new
        self._revision = 0
        self._screenshot_revisions: dict[str, int] = {}

    def add_console_log(self, entry: str) -> None:
        self._console_logs.append(entry)

    def console_logs(self) -> list[str]:
        return list(self._console_logs)

    def clear_console_logs(self) -> int:
        """Drop all console entries, returning how many were removed"""
        count = len(self._console_logs)
        self._console_logs.clear()
        logger.debug(f"Cleared {count} console log entries")
        return count

    def add_screenshot(self, name: str, data: bytes) -> None:
        if name in self._screenshots:
            logger.info(f"Replacing stored screenshot '{name}'")
        self._screenshots[name] = data
        self._revision += 1
        self._screenshot_revisions[name] = self._revision

    def screenshots(self) -> dict[str, bytes]:
        return dict(self._screenshots)

    def get_screenshot(self, name: str) -> bytes | None:
        return self._screenshots.get(name)

    def screenshot_revisions(self) -> dict[str, int]:
        """Name -> revision of the last store under that name"""
        return dict(self._screenshot_revisions)

    @property
    def console_count(self) -> int:
        return len(self._console_logs)

    @property
    def screenshot_names(self) -> list[str]:
        return list(self._screenshots)
