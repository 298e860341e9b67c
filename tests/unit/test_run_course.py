"""Unit tests for the terminal course runner's rendering."""

import importlib.util
from pathlib import Path

import pytest

from mindflow.orchestration.learning_session import LearningSession

_SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "run_course.py"


@pytest.fixture(scope="module")
def run_course():
    spec = importlib.util.spec_from_file_location("run_course", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_show_course_prints_concepts_and_layers(run_course, curriculum, capsys):
    session = LearningSession(gateway=None)
    session.curriculum = curriculum

    run_course.show_course(session)

    out = capsys.readouterr().out
    assert "=== Photosynthesis (Undergraduate Student) ===" in out
    assert "Key takeaway: Light becomes ATP and NADPH." in out
    flow = out.split("Flow:\n", 1)[1].splitlines()
    assert flow == ["  1: Sunlight", "  2: Water  |  CO2", "  3: Glucose"]
