"""Client-side business logic.

Subpackages:
- planning: weekly grid (day index mapping, slot grouping) and scheduled meal edits
- recipes: reconciling edited ingredient lists with the server
"""
__all__ = ["planning", "recipes"]
