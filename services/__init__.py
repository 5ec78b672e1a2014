"""Batch Processor Services Package.

This package contains the services of the batch processor project:
- batch_processor: Reads a JSON list of items, transforms each item and
  writes a JSON report with one record per item
"""

__version__ = "0.1.0"
