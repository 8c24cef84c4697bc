"""
LLM Review Engine

This module provides prompt construction and the inference endpoint
client used to review individual diff hunks.
"""

from .prompts import PromptBuilder
from .client import GenerationConfig, ReviewClient

__all__ = ['PromptBuilder', 'GenerationConfig', 'ReviewClient']
