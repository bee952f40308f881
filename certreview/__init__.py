"""
Certificate Review - critical analysis of calibration certificates.
"""

__version__ = "1.0.0"
