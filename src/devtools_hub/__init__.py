"""
devtools-hub: developer utilities behind a small Flask API.
"""

__version__ = '1.0.0'
