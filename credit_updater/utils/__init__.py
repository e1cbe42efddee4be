"""
Utility modules for the credit updater.
"""
from credit_updater.utils.text import cleanup, truncate
from credit_updater.utils.terminal import millis_to_pretty, up_n_lines

__all__ = [
    "cleanup",
    "truncate",
    "millis_to_pretty",
    "up_n_lines",
]
