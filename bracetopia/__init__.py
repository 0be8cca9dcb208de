"""Bracetopia: a Schelling-style segregation simulation of brace styles."""

__version__ = "0.1.0"
