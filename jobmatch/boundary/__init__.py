"""
Boundary layer.

Adapters for external collaborators: model provider and vector storage.
"""
