"""
Wagerdesk - admin back office API for a sports-betting platform.
"""

__version__ = "0.1.0"
