"""
Pytest configuration for Labeleer CLI tests.

Interactive prompts are scripted with ScriptedTerminal: answers are consumed
in order and every prompt is recorded as (kind, message). Selections are
scripted by choice value, not by index.
"""

import contextlib
import io
from unittest.mock import Mock

import pytest
from rich.console import Console

from labeleer_cli.config import ProjectConfig
from labeleer_cli.gateway import LabeleerClient
from labeleer_cli.terminal import Terminal


class ScriptedTerminal(Terminal):
    """Terminal double that replays scripted answers."""

    def __init__(self, answers=()):
        super().__init__(Console(file=io.StringIO(), width=200, color_system=None))
        self.answers = list(answers)
        self.prompts: list[tuple[str, str]] = []
        self.choice_lists: list[list] = []

    def _next(self, kind, message):
        self.prompts.append((kind, message))
        if not self.answers:
            raise AssertionError(f"Unexpected {kind} prompt: {message}")
        return self.answers.pop(0)

    def select(self, message, choices):
        self.choice_lists.append(choices)
        answer = self._next("select", message)
        enabled = [c.value for c in choices if not c.disabled]
        assert answer in enabled, f"{answer!r} is not a selectable choice of {enabled!r}"
        return answer

    def confirm(self, message):
        return bool(self._next("confirm", message))

    def _read(self, prompt):
        return self._next("ask", prompt)

    def secret(self, message):
        return self._next("secret", message)

    def status(self, message):
        return contextlib.nullcontext()

    @property
    def output(self) -> str:
        return self.console.file.getvalue()

    def prompt_kinds(self) -> list[str]:
        return [kind for kind, _ in self.prompts]


@pytest.fixture
def scripted_terminal():
    """Factory for ScriptedTerminal instances."""
    return ScriptedTerminal


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """An empty project directory used as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def labels_json(project_dir):
    path = project_dir / "labels.json"
    path.write_text("{}", encoding="utf-8")
    return path


@pytest.fixture
def project_config(labels_json):
    return ProjectConfig(project_id="proj_1", access_token="tok_1", local_file_path=labels_json)


@pytest.fixture
def client():
    """LabeleerClient whose HTTP session is a mock."""
    return LabeleerClient("tok_1", session=Mock())


def _make_response(status_code=200, json_data=None, content=b"", reason="OK", text=""):
    """Build a mock requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = reason
    response.content = content
    response.text = text
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def make_response():
    return _make_response
