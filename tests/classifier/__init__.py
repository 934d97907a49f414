"""
Classifier Tests Package
========================
Tests for edit detection and classification.

Run all tests: python3 -m pytest tests/classifier/ -v
"""
