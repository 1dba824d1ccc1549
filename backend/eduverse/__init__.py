"""
EduVerse: a single-session learning management front end.
"""

__version__ = "1.0.0"
