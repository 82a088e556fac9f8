"""
Cookbook API
REST backend for a recipe-sharing application.
"""

__version__ = "1.0.0"
