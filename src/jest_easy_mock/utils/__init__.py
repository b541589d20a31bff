"""
Utility Package.
"""
