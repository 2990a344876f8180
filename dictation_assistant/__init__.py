"""
Dictation Assistant - model routing and settings for AI text enhancement.

Decides which AI provider (cloud vendor or local model) handles dictated
text, how prompts are formatted for it, and keeps the persisted settings
that drive those decisions consistent.
"""

__version__ = "0.2.0"
__description__ = "Model routing and settings core for AI-powered dictation cleanup"
