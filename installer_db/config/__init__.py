# Config package for the installer version collector
from .settings import CollectorSettings, StorageType, load_settings

__all__ = ['CollectorSettings', 'StorageType', 'load_settings']
