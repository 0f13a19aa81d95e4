"""
MedGuide - Medicine Reminders and Information

Local medicine reminders plus OpenFDA adverse event lookups.
"""

__version__ = "0.1.0"
