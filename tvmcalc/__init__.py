"""
Time value of money calculations.
"""

__version__ = "0.1.0"
