"""
cohoard

A chatlog formatter for cohost. Turns play-script style transcripts into an
HTML fragment that survives the platform's restricted HTML subset.
"""

__version__ = "0.2.0"
