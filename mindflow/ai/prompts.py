"""
Prompt text for the two generation calls.

Both prompts embed the exact JSON shape the parser expects; the system
instruction forbids markdown, though extract_json() copes if it is ignored.
"""

from typing import List, Dict


SYSTEM_INSTRUCTION = (
    "You are an expert educator. You respond only with valid JSON, "
    "no markdown code blocks, no explanations."
)

DEEP_DIVE_SCORE_HINT = ">80%"

_CURRICULUM_SCHEMA = """{
  "topic": "string",
  "difficulty": "string",
  "introduction": "A engaging 2-3 sentence hook introducing the topic.",
  "concepts": [
    {
      "id": "string",
      "title": "string",
      "definition": "string",
      "analogy": "A relatable analogy to explain the concept.",
      "keyTakeaway": "One sentence summary."
    }
  ],
  "flowchart": {
    "nodes": [
      {
        "id": "string",
        "label": "string",
        "description": "string",
        "stepOrder": 1
      }
    ],
    "edges": [
      {
        "from": "string",
        "to": "string",
        "label": "optional string"
      }
    ]
  },
  "quiz": [
    {
      "id": "string",
      "question": "string",
      "options": ["option1", "option2", "option3", "option4"],
      "correctIndex": 0,
      "explanation": "string"
    }
  ]
}"""

_DEEP_DIVE_SCHEMA = """{
  "topics": ["topic1", "topic2", "topic3", "topic4", "topic5", "topic6"]
}"""


def build_curriculum_prompt(topic: str, difficulty: str) -> str:
    """Prompt asking for a full learning module on `topic` for `difficulty`."""
    return f"""
Create a comprehensive, interactive-style learning module about "{topic}".
Target Audience: {difficulty}.

The content must be structured to be visualized in a web app.
1. **Concepts**: Break the topic down into 4-6 core concepts.
2. **Flowchart**: Create a logical flow or process map (e.g., Step A leads to Step B, or Hierarchy) representing how the system/concept works. Ensure the 'stepOrder' roughly corresponds to a vertical hierarchy (1 is top/start).
3. **Quiz**: Create 3-5 multiple choice questions to test understanding.

Make the tone appropriate for the "{difficulty}" audience.
For a child, use simple words and fun analogies.
For a professional, use industry standard terminology and deep technical insight.

You MUST respond with valid JSON only, no markdown, no explanation. Use this exact structure:
{_CURRICULUM_SCHEMA}
""".strip()


def build_deep_dive_prompt(current_topic: str, difficulty: str) -> str:
    """Prompt asking for 4-6 follow-up topics after a strong quiz result."""
    return f"""
The user just completed a quiz about "{current_topic}" with a high score ({DEEP_DIVE_SCORE_HINT}).
They want to dive deeper into related topics to fuel their curiosity and continue learning.

Generate 4-6 specific, engaging topic suggestions that are:
1. Directly related to or build upon "{current_topic}"
2. More advanced or specialized than the base topic
3. Curious and thought-provoking (e.g., "Different types of engines", "Jet engines", "Rocket engines" if the topic was "Engines")
4. Appropriate for {difficulty} level

Make the topics specific enough to be interesting, but broad enough to create a full learning module.
Focus on topics that will make the learner think more and explore deeper aspects.

You MUST respond with valid JSON only, no markdown, no explanation. Use this exact structure:
{_DEEP_DIVE_SCHEMA}
""".strip()


def build_messages(prompt: str) -> List[Dict[str, str]]:
    """Two-message conversation: JSON-only system instruction + task prompt."""
    return [
        {"role": "system", "content": SYSTEM_INSTRUCTION},
        {"role": "user", "content": prompt},
    ]
