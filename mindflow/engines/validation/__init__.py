"""
Validation Engine - non-blocking audit of generated curricula.
"""

from mindflow.engines.validation.curriculum_validator import (
    AuditCheck,
    AuditIssue,
    CurriculumValidator,
)

__all__ = [
    "AuditCheck",
    "AuditIssue",
    "CurriculumValidator",
]
