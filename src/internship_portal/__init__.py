"""Internship Portal - students, companies and job offers"""

__version__ = "1.0.0"
