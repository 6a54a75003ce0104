"""
fixguard - conflict detection and resolution for automated code fixes.
"""

__version__ = "0.1.0"
