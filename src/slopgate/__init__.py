"""
SlopGate - Score pull requests for signs of low-effort AI-generated content.

Combines behavioral, content and pattern checks into a single 0-100 risk
score with a pass/warn/flag/block verdict.
"""

__version__ = "0.1.0"
__author__ = "SlopGate Team"
