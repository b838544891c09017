"""
Application layer for the training intelligence engine.

This package contains:
- ports/: Abstract repository interfaces (what the engine needs)
- exceptions.py: Errors raised by the engine and its stores
"""
