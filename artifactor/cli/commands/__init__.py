"""CLI commands"""

from . import publish
from . import scan
from . import doctor

__all__ = [
    "publish",
    "scan",
    "doctor",
]
