"""Services for artifactor"""

from .config_service import ConfigService
from .publish_service import PublishService

__all__ = [
    "ConfigService",
    "PublishService",
]
