"""
Campaign Wizard

Draft model, conditional field rules, step validation and the wizard
controller for authoring influencer marketing campaigns.
"""

__version__ = "0.1.0"
