"""
Curriculum schemas - the course document produced by one generation request.

Wire format is camelCase (keyTakeaway, stepOrder, correctIndex, from/to);
attributes are snake_case and either name is accepted on input.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DifficultyLevel(str, Enum):
    """Audience presets. Only shapes the prompt."""
    CHILD = "5 Year Old (ELI5)"
    TEENAGER = "High School Student"
    UNDERGRAD = "Undergraduate Student"
    PROFESSIONAL = "Industry Professional"

    def __str__(self) -> str:
        return self.value


class CamelModel(BaseModel):
    """Base for generated content: camelCase aliases, lax id types."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class Concept(CamelModel):
    """A single explained concept."""

    id: str
    title: str
    definition: str
    analogy: str
    key_takeaway: str


class FlowNode(CamelModel):
    """A flowchart node; step_order is its vertical layer."""

    id: str
    label: str
    description: str = ""
    step_order: int = Field(ge=0)


class FlowEdge(CamelModel):
    """Directed edge between two node ids. Unknown ids are tolerated."""

    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    label: Optional[str] = None


class Flowchart(CamelModel):
    nodes: List[FlowNode] = []
    edges: List[FlowEdge] = []


class QuizQuestion(CamelModel):
    """Multiple-choice question. correct_index is 0-based into options."""

    id: str
    question: str
    options: List[str]
    correct_index: int
    explanation: str = ""


class Curriculum(CamelModel):
    """A complete generated course. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    topic: str
    difficulty: str
    introduction: str
    concepts: List[Concept]
    flowchart: Flowchart
    quiz: List[QuizQuestion]


class DeepDiveTopics(BaseModel):
    """Follow-up topic suggestions. Any length, including empty."""

    topics: List[str]


# ── Request bodies ───────────────────────────────────────────────────────

class CurriculumRequest(CamelModel):
    """Body of POST /generate-curriculum. Presence is checked by the handler."""

    topic: Optional[str] = None
    difficulty: Optional[str] = None


class DeepDiveRequest(CamelModel):
    """Body of POST /generate-deep-dive."""

    current_topic: Optional[str] = None
    difficulty: Optional[str] = None
