"""
LightAI - a small chat relay with a local rule-based responder and an
optional OpenAI backend.
"""

__version__ = "0.1.0"
