"""
Fixed outline normalization rules.

This file exists to make the line-termination contract explicit.
"""

LINE_BREAK = "\n"
DEFAULT_INDENT = 0  # a line with no recorded indent sits at the root
MAX_INDENT = 8  # deepest indent an outline editor emits, deeper lines are clamped

# list kinds an editor may put on a terminating line break
LIST_KINDS = ("bullet", "ordered", "checked", "unchecked")
