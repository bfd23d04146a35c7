"""
API dependencies.
"""
