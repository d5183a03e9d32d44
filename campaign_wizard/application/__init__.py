"""
Application layer: update commands, services and the wizard use case.
"""
