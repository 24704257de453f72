"""Unit tests for core domain logic.

These tests exercise the ledger, its models and penalty rules
without any adapters.
"""
