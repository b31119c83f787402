"""
Chat module.

Conversation with the companion, grounded in the learner's plan.
"""
