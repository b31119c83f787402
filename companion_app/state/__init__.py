"""
Plan lifecycle state machine.

Drives the view flow onboarding → pathways → generation → review →
(revision) → dashboard, with home as the hub between plans, and persists
plans at the confirm points.
"""
