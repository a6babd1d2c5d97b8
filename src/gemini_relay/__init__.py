"""
gemini-relay: a small HTTP facade in front of Google's Gemini models.

Clients send a text prompt, an image or a document; the service normalizes the
request into an ordered list of model parts, dispatches it and returns the
generated text.
"""

__version__ = "1.0.0"
