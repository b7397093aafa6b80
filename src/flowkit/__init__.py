"""
Flowkit: workflow graph normalization and validation for chat applications.

Materializes node templates onto a canvas, reconciles saved nodes against
newer template versions, resolves variable references and validates graphs
before they are saved or run.
"""

__version__ = "0.1.0"
