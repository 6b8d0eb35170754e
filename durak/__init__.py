"""
Durak: a rules engine for the Russian card game, with a console front end.
"""

__version__ = "0.1.0"
