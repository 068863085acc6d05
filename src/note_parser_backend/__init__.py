"""
Note Parser Backend

Extracts structured fields (subject, action, date, time, participants,
location, priority, tags) from free-form note text by running independent
pattern-based field parsers and merging their results with per-field
confidence levels.
"""

__version__ = "0.1.0"
