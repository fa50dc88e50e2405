"""
Test suite for piengine

Contains:
- tests/unit/          : Unit tests for arithmetic primitives, precision policy
                         and the five algorithms
"""
