"""
Notion Tree

Discovers every page and database shared with a Notion integration and
renders the workspace hierarchy.
"""

__version__ = "0.1.0"
