"""
Classbook - classroom management API for teachers.
"""

__version__ = "1.0.0"
