"""Shared fixtures: a recording fake for the shell runner and an isolated config store."""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from gitpush.config import ConfigStore
from gitpush.errors import SubprocessFailure
from gitpush.git import GitClient


class FakeRunner:
    """Stands in for ``shell.run``; answers by argv and records every call.

    ``responses`` maps an argv tuple to stdout text, an exception instance, or a
    list of those consumed one per call. Unlisted commands succeed with "".
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def __call__(self, binary, args, mode='captured', cwd=None):
        argv = (binary, *args)
        self.calls.append(argv)
        answer = self.responses.get(argv, "")
        if isinstance(answer, list):
            answer = answer.pop(0) if len(answer) > 1 else answer[0]
        if isinstance(answer, Exception):
            raise answer
        return answer

    def ran(self, *argv):
        return tuple(argv) in self.calls


def failure(*argv, output=""):
    return SubprocessFailure(list(argv), 1, output)


@pytest.fixture
def store(tmp_path):
    return ConfigStore(tmp_path / "config")


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def git(runner, tmp_path):
    return GitClient(runner=runner, cwd=str(tmp_path / "my-project"))
