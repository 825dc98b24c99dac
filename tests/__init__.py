"""
Test suite for camel-bignum

Contains:
- tests/unit/          : Unit tests for individual modules
"""
