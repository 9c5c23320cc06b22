"""Version information for artifactor"""

__version__ = "0.3.0"
__version_info__ = tuple(int(part) for part in __version__.split("."))
__author__ = "artifactor contributors"
__email__ = "artifactor@users.noreply.github.com"
__license__ = "MIT"
