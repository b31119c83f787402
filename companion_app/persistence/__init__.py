"""
Persistence module.

Single-blob plan and note storage over a local key-value backend.
"""
