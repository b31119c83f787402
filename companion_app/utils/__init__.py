"""
Utility functions module.

Time Semantics:
- All persisted timestamps are integer epoch milliseconds
- Wall-clock time is read through an injectable clock so tests are deterministic
"""
