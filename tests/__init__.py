"""Batch Processor Test Suite.

This package contains unit and integration tests for the batch processor.

Test Structure:
- unit/: Unit tests for individual functions and classes
- integration/: End-to-end runs of the command-line entry point
"""

__version__ = "0.1.0"
