"""
Linguistic Service Tests
========================
Integration tests for the real NLP services. Each test skips when its
library or data is not installed.

Run all tests: python3 -m pytest tests/nlp/ -v
Run specific: python3 -m pytest tests/nlp/test_semantics.py -v
"""
