"""Prompt templates for the plan generation service."""

import json
from typing import Optional, Sequence

from ..data.models import Plan, UserProfile

PLAN_SCHEMA_TEMPLATE = """{{
  "topic": "Topic Name",
  "days": [
    {{
      "id": "day-1",
      "title": "Day 1: Focus Area",
      "steps": [
        {{
          "id": "d1-s1",
          "title": "Step Title - make this descriptive for searching",
          "type": "video" | "article" | "quiz" | "exercise" | "project",
          "duration": "15m",
          "url": "{url_placeholder}",
          "completed": false
        }}
      ]
    }}
  ]
}}"""

SEARCH_POPULATED_NOTE = """**Note: URLs will be populated automatically. Focus on creating descriptive step titles that will help find relevant resources.**
For the "url" field, use an empty string "" - real URLs will be found via search."""

GROUNDED_SEARCH_NOTE = """**CRITICAL INSTRUCTION: FIND REAL RESOURCES**
Use Google Search to find high-quality, free, and accessible learning resources for each step.
- For "video" steps, find actual YouTube videos or free course videos.
- For "article" steps, find reputable tutorials, documentation, or blog posts.
- For "project" steps, find specific project ideas or tutorials.
Double check that all URLs are real and relevant found from your search."""

CHAT_CONTEXT_PREFIX = (
    "System Context: The user is following this learning plan. "
    "Use it to answer questions contextually.\n\n"
)


def _profile_block(profile: UserProfile) -> str:
    return (
        f"- Topic: {profile.topic}\n"
        f"- Level: {profile.level.value}\n"
        f"- Time per day: {profile.time_commitment.value}\n"
        f"- Goal/Motivation: {profile.motivation}"
    )


def _schema(search_populates_urls: bool) -> str:
    placeholder = "" if search_populates_urls else "https://actual-url-found-via-search.com"
    return PLAN_SCHEMA_TEMPLATE.format(url_placeholder=placeholder)


def build_plan_prompt(
    profile: UserProfile,
    pathway_titles: Sequence[str],
    plan_days: int,
    search_populates_urls: bool
) -> str:
    """Prompt for a fresh multi-day plan."""
    pathway_context = ""
    if pathway_titles:
        pathway_context = (
            "The user has chosen to focus on these specific learning pathways/directions: "
            f"{', '.join(pathway_titles)}. Ensure the curriculum heavily emphasizes these areas."
        )

    return f"""You are an expert curriculum designer. Create a {plan_days}-day learning plan for:
{_profile_block(profile)}

{pathway_context}

{SEARCH_POPULATED_NOTE if search_populates_urls else GROUNDED_SEARCH_NOTE}

Return ONLY raw JSON (no markdown formatting, no code blocks) with this exact structure:
{_schema(search_populates_urls)}

Make it engaging and practical.
Ensure there are {plan_days} days.
Ensure steps fit within the {profile.time_commitment.value} daily limit.
"""


def build_pathways_prompt(profile: UserProfile, min_pathways: int, max_pathways: int) -> str:
    """Prompt for candidate pathways within a topic."""
    return f"""You are an expert educational counselor. The user wants to learn about "{profile.topic}".
Identify {min_pathways}-{max_pathways} distinct, actionable learning pathways or specializations within this topic that they could focus on.

User Profile:
- Level: {profile.level.value}
- Motivation: {profile.motivation}

Return ONLY raw JSON (no markdown formatting) with this structure:
[
  {{
    "id": "path-1",
    "title": "Short Headline (e.g. Data Scientist)",
    "learning_goal": "A concise sentence describing the primary outcome or goal of this path."
  }}
]
"""


def build_revision_prompt(
    plan: Plan,
    profile: UserProfile,
    feedback: str,
    plan_days: int,
    search_populates_urls: bool
) -> str:
    """Prompt for revising an existing plan from feedback."""
    url_note = (
        SEARCH_POPULATED_NOTE if search_populates_urls
        else "Use Google Search to find real URLs for any new or changed resources."
    )

    return f"""You are an expert curriculum designer. Revise the following learning plan based on user feedback.

Original plan:
{json.dumps(plan.to_dict(), indent=2)}

User profile:
{_profile_block(profile)}

User feedback: {feedback}

Revise the plan according to the feedback while maintaining the same JSON structure. Keep the same number of days ({plan_days} days) unless the feedback specifically requests a different duration. Ensure steps fit within the {profile.time_commitment.value} daily limit.

{url_note}

Return ONLY raw JSON (no markdown formatting, no code blocks) with this exact structure:
{_schema(search_populates_urls)}
"""


def build_chat_context(plan: Optional[Plan]) -> str:
    """Context prefix prepended to the first user message of a chat."""
    if plan is None:
        return ""
    return f"{CHAT_CONTEXT_PREFIX}{json.dumps(plan.to_dict())}\n\n"
