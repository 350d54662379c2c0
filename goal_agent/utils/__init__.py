"""
Utilities
"""
