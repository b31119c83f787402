#!/usr/bin/env python3
"""
Basic Usage Example - Learning Companion

This script walks through the plan lifecycle with the offline mock service
and an in-memory store. It shows how to:
- Start the controller and complete onboarding
- Pick pathways, review and revise the generated plan
- Confirm the plan and track progress on the dashboard
- Keep a note and chat with the companion

Run: python examples/basic_usage.py
"""

from companion_app.config.defaults import get_default_config
from companion_app.data.models import Level, TimeCommitment, UserProfile
from companion_app.engine import CompanionEngine
from companion_app.logging.config import configure_logging
from companion_app.persistence.backends import MemoryKeyValueBackend
from companion_app.progress.tracker import first_incomplete_step, plan_progress
from companion_app.services.mock import MockPlanService


def main() -> None:
    configure_logging(level="WARNING")
    engine = CompanionEngine(
        get_default_config(),
        backend=MemoryKeyValueBackend(),
        service=MockPlanService(),
    )
    controller = engine.controller

    unsubscribe = controller.subscribe(
        lambda old, new: print(f"  {old.view.value} -> {new.view.value}") if old.view != new.view else None
    )

    print("🚀 Starting")
    engine.start()

    print("\n📝 Onboarding")
    controller.submit_profile(UserProfile(
        topic="Go",
        time_commitment=TimeCommitment.MIN_30,
        level=Level.BEGINNER,
        motivation="Write backend services",
    ))
    for pathway in controller.state.pathways:
        print(f"  • {pathway.title}: {pathway.learning_goal}")

    print("\n🧭 Choosing the first pathway")
    controller.confirm_pathways([controller.state.pathways[0].id])

    print("\n✏️  Revising once")
    controller.request_revision()
    controller.submit_feedback("add more video content")
    print(f"  can revise again: {controller.can_revise}")

    print("\n✅ Confirming")
    plan_id = controller.confirm_plan()
    print(f"  saved as {plan_id}")

    plan = controller.plan
    first_day = plan.days[0]
    controller.toggle_step(first_day.id, first_day.steps[0].id)
    progress = plan_progress(controller.plan)
    print(f"\n📈 Progress: {progress.completed}/{progress.total} ({progress.percent_rounded}%)")
    next_up = first_incomplete_step(controller.plan)
    if next_up:
        print(f"  next up: {next_up.day_title} / {next_up.step.title}")

    chat = engine.chat_session()
    reply = chat.send("What should I focus on today?")
    print(f"\n💬 {reply.content}")

    controller.back_to_home()
    unsubscribe()

    notes = engine.note_session()
    notes.edit(title="Day 1", body="Goroutines are cheap.")
    notes.autosave()
    print(f"\n🗒️  Notes: {[entry.title for entry in notes.entries()]}")
    print(f"📚 Plans: {[summary.topic for summary in controller.plan_summaries()]}")


if __name__ == "__main__":
    main()
