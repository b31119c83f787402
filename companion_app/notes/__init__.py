"""
Notes module.

Editor session for freeform log entries with dirty tracking and autosave.
"""
