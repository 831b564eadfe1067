"""Pytest configuration and shared fixtures."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from taskpad.controller import Controller
from taskpad.storage import Storage
from taskpad.task import Deadline, Event, Todo
from taskpad.task_list import TaskList


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the user's real config and task file."""
    monkeypatch.setenv("TASKPAD_CONFIG", str(tmp_path / "config.yaml"))
    monkeypatch.delenv("TASKPAD_DATA_FILE", raising=False)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "tasks.txt"


@pytest.fixture
def storage(data_file):
    return Storage(data_file)


@pytest.fixture
def sample_tasks():
    done_deadline = Deadline("submit report", due=datetime(2023, 12, 25, 14, 0))
    done_deadline.mark_done()
    return [
        Todo("buy milk"),
        done_deadline,
        Event("conference", start=datetime(2024, 1, 10, 9, 0), end=datetime(2024, 1, 12, 17, 30)),
    ]


@pytest.fixture
def task_list(sample_tasks):
    return TaskList(sample_tasks)


@pytest.fixture
def controller(storage):
    return Controller(TaskList(), storage)
