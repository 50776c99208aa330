"""splitlog - split a text file at a line, keeping the tail in place"""

__version__ = "0.3.0"
