"""
Yogurt Product Transform Pipeline

A batch pipeline that classifies product records as yogurt by keyword
matching on their titles and writes a transformed JSON array.

Main components:
- data_loader: Read and decode the input products JSON
- products_classifier: Keyword-based yogurt classification and batch transform
- output_writer: Encode and write the transformed products
- pipeline_runner: Orchestration script and CLI for the end-to-end workflow
"""

__version__ = "1.0.0"
