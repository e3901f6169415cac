"""Lexora: meeting transcript summarization service and client."""

__version__ = "0.1.0"
