"""
mindmap_editor - A Textual TUI for sketching mindmaps

Build a single-rooted tree from the keyboard, let it lay itself out
horizontally or vertically, copy it out as text to paste back in later,
and export it as a hierarchical CSV outline.
"""

__version__ = "0.1.0"
