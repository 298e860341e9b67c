"""Learner-side client for the MindFlow server."""

from mindflow.client.gateway import CurriculumGateway

__all__ = ["CurriculumGateway"]
