"""
Data models and service payload parsing.

Defines the plan, profile and note entities and converts raw generation
service output into validated models.
"""
