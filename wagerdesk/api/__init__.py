"""
HTTP layer.
"""
