"""
GCD Credit Updater v1.0.0

Extracts character appearances and creator credits from the free-text
fields of Grand Comics Database stories into the m_* migration tables.
"""

__version__ = "1.0.0"
