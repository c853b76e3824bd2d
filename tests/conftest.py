import json
import os
import sys
import tempfile
from pathlib import Path

import pytest

os.environ.setdefault("ENABLE_FILE_LOGS", "0")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.registry import GRADER_KEY, bind_model
from config.settings import settings
from grading import bind_default_grader
from storage.migrate import migrate

from tests.fakes import BEHAVIORAL_REPLY, TECHNICAL_REPLY


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch):
    td = tempfile.TemporaryDirectory()
    db_path = os.path.join(td.name, "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None, raising=False)
    migrate(db_path)
    try:
        yield db_path
    finally:
        bind_default_grader()
        td.cleanup()


@pytest.fixture
def rubric_grader():
    """Bind a grader that answers with a valid rubric for the prompt's question type."""

    prompts = []

    def _fake(**kwargs):
        prompt = kwargs["messages"][-1]["content"]
        prompts.append(prompt)
        if "STAR rubric" in prompt:
            return json.dumps(BEHAVIORAL_REPLY)
        return json.dumps(TECHNICAL_REPLY)

    bind_model(GRADER_KEY, _fake)
    return prompts
