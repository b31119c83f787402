"""
Learning Companion - study plan lifecycle core

A local-first learning companion: a user describes a topic, an LLM service
generates a multi-day study plan, and the user tracks progress, revises the
plan and keeps freeform notes. All state lives in a single local blob.
"""

__version__ = "0.1.0"
__author__ = "Learning Companion Team"
