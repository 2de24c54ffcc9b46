"""
Employee API - CRUD service over a pooled relational database
"""

__version__ = "1.0.0"
