"""
Prompt-Consolidator: Combine a directory of markdown prompts into one guide.

This tool produces a single markdown document from:
- An instructions document rendered first under a fixed heading
- Every prompt document, priority files first, the rest alphabetically
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
