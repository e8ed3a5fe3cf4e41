#!/usr/bin/env python3
"""
Lesson Preview Script
Runs the lesson pipeline for one standard and prints what the API would return
"""

import asyncio
import json
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chronicle.core.logging import logger
from chronicle.services.lesson_service import InvalidStandardError, generate_lessons
from chronicle.services.llm_service import llm_service


def preview(standard: str, as_json: bool = False):
    result = asyncio.run(generate_lessons(standard))

    if as_json:
        print(json.dumps(result.model_dump(by_alias=True), indent=2))
        return

    print("=" * 60)
    print("📜 LESSON PREVIEW")
    print("=" * 60)
    print(f"🤖 AI service: {'configured' if llm_service.is_configured else 'not configured (templated lessons)'}")
    print(f"🎓 Grade level: {result.detected_grade_level}")
    print(f"🧹 Cleaned standard: {result.cleaned_standard}")
    print(f"🔑 Topics: {', '.join(result.extracted_topics) or '(none)'}")

    for number, lesson in enumerate(result.lessons, start=1):
        print(f"\n{number}. {lesson.title} ({lesson.time_estimate})")
        print(f"   {lesson.description}")
        for activity in lesson.activities:
            print(f"   - {activity}")
        if lesson.suggested_activities:
            names = ", ".join(activity.name for activity in lesson.suggested_activities)
            print(f"   Suggested: {names}")

    if result.research_links:
        print("\n🔍 Research links:")
        for link in result.research_links:
            print(f"   - {link.title}: {link.url}")
    print("=" * 60)


if __name__ == "__main__":
    args = [arg for arg in sys.argv[1:] if arg != "--json"]
    standard = " ".join(args) if args else sys.stdin.read()

    try:
        preview(standard, as_json="--json" in sys.argv[1:])
    except InvalidStandardError as e:
        print(f"\n❌ Invalid standard: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Preview failed: {e}", exc_info=True)
        print(f"\n❌ Error: {e}")
        sys.exit(1)
