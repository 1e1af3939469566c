"""
Drill Cards

Adaptive flashcard review with tolerant answer matching.
"""

__version__ = "0.1.0"
