"""
Utility functions for the yogurt pipeline.

- flat_export: Write transformed products as a flat CSV table
"""
