"""Desktop notification helpers for Local Playlists."""

import shutil
import subprocess
from typing import Literal

from loguru import logger

APP_NAME = "Local Playlists"

Urgency = Literal["low", "normal", "critical"]


def notify(title: str, message: str, urgency: Urgency = "normal") -> bool:
    """
    Show a desktop notification using notify-send.

    Args:
        title: Notification title
        message: Notification message body
        urgency: Urgency level ('low', 'normal', 'critical')

    Returns:
        True if notify-send ran and exited cleanly; False when it is not
        installed or failed (the failure is logged, never raised).
    """
    executable = shutil.which("notify-send")
    if executable is None:
        return False

    command = [executable, "--urgency", urgency, "--app-name", APP_NAME, title, message]
    try:
        completed = subprocess.run(command, check=False, timeout=2.0, capture_output=True)
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.debug(f"Desktop notification failed: {e}")
        return False

    if completed.returncode != 0:
        logger.debug(f"notify-send exited with {completed.returncode}")
        return False
    return True


def notify_success(message: str) -> bool:
    """Show a success notification with checkmark."""
    return notify(f"✓ {APP_NAME}", message)


def notify_error(message: str) -> bool:
    """Show an error notification with X mark."""
    return notify(f"✗ {APP_NAME}", message, urgency="critical")
