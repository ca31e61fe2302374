"""Rules substrate for Diplomacy-style territorial strategy games."""

__version__ = "0.1.0"
