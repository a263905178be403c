"""
Application layer: services that orchestrate the core components.
"""
