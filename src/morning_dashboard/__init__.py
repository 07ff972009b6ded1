"""Morning Dashboard - a morning productivity overview for the terminal and browser."""

__version__ = "2.1.0"
