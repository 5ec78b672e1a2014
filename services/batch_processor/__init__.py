"""
Batch Processor Service

This service reads a JSON input file, applies a per-item transformation and
writes a JSON report of the results.

Key responsibilities:
- Load settings from config/settings.yml (with environment overrides)
- Read and normalize the input file into an ordered list of items
- Transform each item, isolating per-item failures into error records
- Write the report as pretty-printed JSON, creating directories as needed
"""

__version__ = "0.1.0"
