from .manager import SettingsManager
from .preferences import SettingsPreferenceSink

__all__ = ["SettingsManager", "SettingsPreferenceSink"]
