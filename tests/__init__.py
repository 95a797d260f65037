"""
Test Suite for datesynth

Provides tests for:
- Interval sampling and date entry points
- Month, weekday and time zone selection
- Clock provider and random source
- Batch temporal generation
- Configuration management and CLI
"""

__version__ = "1.0.0"
