"""
Application use cases.
"""

from .wizard import PersistenceResult, PublishOutcome, PublishResult, WizardController

__all__ = ["PersistenceResult", "PublishOutcome", "PublishResult", "WizardController"]
