"""Application support layer.

Classes:
    ConfigManager: QSettings wrapper for configuration.
"""

from mpdctrl.core.config import ConfigManager

__all__ = ["ConfigManager"]
