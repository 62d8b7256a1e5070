"""
safeprep - question pool engine for SAFe Scrum Master exam preparation.

Builds exam and lesson quizzes from the built-in question banks and an
optional external question store.
"""

__version__ = "1.0.0"
