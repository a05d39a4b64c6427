"""
Patient Insight Engine

Turns a patient's accumulated therapy-session history into a structured,
confidence-scored set of clinical observations.
"""

__version__ = "0.1.0"
