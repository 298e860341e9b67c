"""Take a MindFlow course in the terminal against a running server."""
import asyncio
import sys

import httpx

from mindflow.client.gateway import CurriculumGateway
from mindflow.orchestration.learning_session import AppStatus, LearningSession
from mindflow.schemas.curriculum import DifficultyLevel

BASE = "http://localhost:8000"
LEVELS = list(DifficultyLevel)


def pick_level():
    print("Who is learning?")
    for i, level in enumerate(LEVELS, 1):
        print(f"  {i}. {level}")
    choice = input("Level [3]: ").strip() or "3"
    try:
        return LEVELS[int(choice) - 1]
    except (ValueError, IndexError):
        print("  Unknown level, using Undergraduate Student")
        return DifficultyLevel.UNDERGRAD


def show_course(session):
    c = session.curriculum
    print(f"\n=== {c.topic} ({c.difficulty}) ===\n")
    print(c.introduction)
    for concept in c.concepts:
        print(f"\n- {concept.title}")
        print(f"  {concept.definition}")
        print(f"  Analogy: {concept.analogy}")
        print(f"  Key takeaway: {concept.key_takeaway}")

    layout = session.flowchart_layout
    print("\nFlow:")
    for step, layer in layout.layers().items():
        print(f"  {step}: " + "  |  ".join(p.node.label for p in layer))


def take_quiz(quiz):
    while not quiz.completed:
        q = quiz.current_question
        print(f"\nQ{quiz.current_index + 1}/{quiz.total}: {q.question}")
        for i, option in enumerate(q.options, 1):
            print(f"  {i}. {option}")
        raw = input("Answer: ").strip()
        try:
            correct = quiz.select_option(int(raw) - 1)
        except ValueError:
            print("  Pick one of the numbers above")
            continue
        print("  Correct!" if correct else f"  Wrong. Answer: {q.options[q.correct_index]}")
        if q.explanation:
            print(f"  {q.explanation}")
        quiz.advance()
    print(f"\nScore: {quiz.score}/{quiz.total} ({quiz.percentage}%)")


async def main():
    topic = " ".join(sys.argv[1:]) or input("Topic: ")
    if not topic.strip():
        print("No topic given")
        sys.exit(1)
    async with httpx.AsyncClient(base_url=BASE, timeout=120) as http:
        session = LearningSession(CurriculumGateway(http), difficulty=pick_level())

        print(f"\nGenerating course on {topic!r}...")
        await session.start(topic)
        while True:
            if session.status != AppStatus.READY:
                print(f"Generation failed: {session.last_error}")
                sys.exit(1)

            show_course(session)
            take_quiz(session.quiz)

            topics = await session.quiz.deep_dive.wait() if session.quiz.deep_dive else []
            if not topics:
                break
            print("\nDive deeper:")
            for i, t in enumerate(topics, 1):
                print(f"  {i}. {t}")
            raw = input("Next topic (enter to stop): ").strip()
            if not raw.isdigit() or not 1 <= int(raw) <= len(topics):
                break
            topic = topics[int(raw) - 1]
            print(f"\nGenerating course on {topic!r}...")
            await session.select_deep_dive(topic)


if __name__ == "__main__":
    asyncio.run(main())
