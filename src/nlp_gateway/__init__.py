"""
NLP Gateway - Thin web layer over a hosted NLP provider.

This package forwards text to IBM Watson for sentiment analysis, keyword
extraction, language detection and translation, and turns keyword results
into word-frequency lists.
"""

__version__ = "0.1.0"
