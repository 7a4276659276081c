from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import pytest

from remote_prompt import facade
from remote_prompt.__main__ import build_parser, load_questions, main
from remote_prompt.errors import PromptConnectionError


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in ("HOST", "PORT", "BUNDLE", "SOCKET"):
        monkeypatch.delenv(f"REMOTE_PROMPT_{key}", raising=False)


class TestLoadQuestions:
    def test_json_list(self, tmp_path):
        path = tmp_path / "q.json"
        path.write_text(json.dumps([{"name": "a", "message": "A?"}]))
        assert load_questions(path) == [{"name": "a", "message": "A?"}]

    def test_json_single_object(self, tmp_path):
        path = tmp_path / "q.json"
        path.write_text(json.dumps({"name": "a"}))
        assert load_questions(path) == [{"name": "a"}]

    def test_toml(self, tmp_path):
        path = tmp_path / "q.toml"
        path.write_text('[[questions]]\nname = "a"\n\n[[questions]]\nname = "b"\ntype = "confirm"\n')
        assert [q["name"] for q in load_questions(path)] == ["a", "b"]

    def test_rejects_scalars(self, tmp_path):
        path = tmp_path / "q.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_questions(path)


class TestParser:
    def test_ask_flags(self):
        args = build_parser().parse_args(["ask", "q.json", "--socket", "--port", "9000", "--bundle"])
        assert args.socket is True
        assert args.port == 9000
        assert args.bundle is True

    def test_ask_flags_default_to_none(self):
        args = build_parser().parse_args(["ask", "q.json"])
        assert args.socket is None
        assert args.bundle is None

    def test_message_requires_type(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["message"])


class TestMain:
    def test_ask_prints_json(self, tmp_path, capsys):
        path = tmp_path / "q.json"
        path.write_text(json.dumps([{"name": "a"}]))
        with patch.object(facade, "prompt", AsyncMock(return_value={"a": 1})) as mocked:
            assert main(["ask", str(path), "--json"]) == 0

        config = mocked.await_args.args[1]
        assert config.socket is False
        assert '"a": 1' in capsys.readouterr().out

    def test_message(self, capsys):
        with patch.object(facade, "socket_message", AsyncMock(return_value={})) as mocked:
            code = main(["message", "--type", "info", "--code", "C", "--message", "hi", "--port", "9001"])

        assert code == 0
        config = mocked.await_args.args[0]
        assert config.message_frame() == {"type": "info", "code": "C", "message": "hi"}
        assert config.port == 9001

    def test_error_exit_status(self, capsys):
        with patch.object(facade, "socket_message", AsyncMock(side_effect=PromptConnectionError("refused"))):
            assert main(["message", "--type", "info"]) == 1
        assert "refused" in capsys.readouterr().out
