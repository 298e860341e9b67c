"""
Curriculum audit - flags the lenient cases the pipeline accepts.

Nothing here rejects a curriculum. Generated content is rendered as long as
it parses; these checks only surface the assumptions the renderer and quiz
make so they show up in logs:

- edges pointing at unknown node ids (dropped by the layout)
- correctIndex outside the options list (question cannot be answered right)
- cycles in the flowchart (drawn as-is, layout ignores edge direction)
- duplicate node ids (edges resolve to the first)
"""

from enum import Enum
from typing import Dict, List, Optional, Set

from pydantic import BaseModel

from mindflow.schemas.curriculum import Curriculum, Flowchart, QuizQuestion


class AuditCheck(str, Enum):
    """Kinds of audit findings."""
    DANGLING_EDGE = "dangling_edge"
    CORRECT_INDEX_OUT_OF_RANGE = "correct_index_out_of_range"
    FLOWCHART_CYCLE = "flowchart_cycle"
    DUPLICATE_NODE_ID = "duplicate_node_id"
    EMPTY_QUIZ = "empty_quiz"


class AuditIssue(BaseModel):
    """A single audit finding."""

    check: AuditCheck
    message: str
    item_id: Optional[str] = None


class CurriculumValidator:
    """Static checks over a parsed curriculum. All findings are warnings."""

    @classmethod
    def audit(cls, curriculum: Curriculum) -> List[AuditIssue]:
        issues: List[AuditIssue] = []
        issues.extend(cls.check_node_ids(curriculum.flowchart))
        issues.extend(cls.check_edges(curriculum.flowchart))
        issues.extend(cls.check_cycles(curriculum.flowchart))
        issues.extend(cls.check_quiz(curriculum.quiz))
        return issues

    @classmethod
    def check_node_ids(cls, flowchart: Flowchart) -> List[AuditIssue]:
        seen: Set[str] = set()
        issues = []
        for node in flowchart.nodes:
            if node.id in seen:
                issues.append(AuditIssue(
                    check=AuditCheck.DUPLICATE_NODE_ID,
                    message=f"Node id '{node.id}' appears more than once",
                    item_id=node.id,
                ))
            seen.add(node.id)
        return issues

    @classmethod
    def check_edges(cls, flowchart: Flowchart) -> List[AuditIssue]:
        """Edges whose endpoints are not nodes."""
        node_ids = {n.id for n in flowchart.nodes}
        issues = []
        for edge in flowchart.edges:
            missing = [ref for ref in (edge.from_id, edge.to_id) if ref not in node_ids]
            if missing:
                issues.append(AuditIssue(
                    check=AuditCheck.DANGLING_EDGE,
                    message=f"Edge {edge.from_id} -> {edge.to_id} references unknown node(s): {', '.join(missing)}",
                    item_id=f"{edge.from_id}->{edge.to_id}",
                ))
        return issues

    @classmethod
    def check_cycles(cls, flowchart: Flowchart) -> List[AuditIssue]:
        """One issue per back edge found by DFS (self-loops included)."""
        node_ids = {n.id for n in flowchart.nodes}
        graph: Dict[str, List[str]] = {nid: [] for nid in node_ids}
        for edge in flowchart.edges:
            if edge.from_id in node_ids and edge.to_id in node_ids:
                graph[edge.from_id].append(edge.to_id)

        WHITE, GREY, BLACK = 0, 1, 2
        color = {nid: WHITE for nid in graph}
        issues = []

        # Iterative DFS; a GREY target on the stack closes a cycle
        for start in sorted(graph):
            if color[start] != WHITE:
                continue
            stack = [(start, iter(graph[start]))]
            color[start] = GREY
            while stack:
                node, children = stack[-1]
                child = next(children, None)
                if child is None:
                    color[node] = BLACK
                    stack.pop()
                elif color[child] == GREY:
                    issues.append(AuditIssue(
                        check=AuditCheck.FLOWCHART_CYCLE,
                        message=f"Flowchart has a cycle through '{child}'",
                        item_id=child,
                    ))
                elif color[child] == WHITE:
                    color[child] = GREY
                    stack.append((child, iter(graph[child])))
        return issues

    @classmethod
    def check_quiz(cls, questions: List[QuizQuestion]) -> List[AuditIssue]:
        if not questions:
            return [AuditIssue(check=AuditCheck.EMPTY_QUIZ, message="Quiz has no questions")]
        issues = []
        for q in questions:
            if not 0 <= q.correct_index < len(q.options):
                issues.append(AuditIssue(
                    check=AuditCheck.CORRECT_INDEX_OUT_OF_RANGE,
                    message=(
                        f"Question '{q.id}' has correctIndex {q.correct_index} "
                        f"but {len(q.options)} option(s)"
                    ),
                    item_id=q.id,
                ))
        return issues
