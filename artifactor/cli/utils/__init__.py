"""CLI utility functions"""

from .output import component_table, format_publish_result, format_error

__all__ = [
    'component_table',
    'format_publish_result',
    'format_error',
]
