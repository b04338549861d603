#!/usr/bin/env python3
"""
Test suite for the matching engine.

All tests are plain unit tests (no external services):

    # Run everything
    python -m pytest tests/ -v

    # Only the end-to-end scenario checks
    python -m pytest tests/ -v -m scenario

    # Using unittest
    python -m unittest discover tests -v
"""
