"""Tests for the flowkit CLI."""

import json
from pathlib import Path
from typing import Any

import httpx
import pytest
import respx
import yaml
from typer.testing import CliRunner

from flowkit import __version__
from flowkit.cli import app

# Stderr output is combined with stdout by default when using CliRunner.invoke()
runner = CliRunner()


def _workflow(reply_text: str, *, extra_edges: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    return {
        "nodes": [
            {"nodeId": "start", "flowNodeType": "workflowStart", "position": {"x": 0, "y": 0}},
            {
                "nodeId": "reply",
                "flowNodeType": "answerNode",
                "position": {"x": 300, "y": 0},
                "inputs": [{"key": "text", "value": reply_text}],
            },
        ],
        "edges": [{"source": "start", "target": "reply"}, *(extra_edges or [])],
        "chatConfig": {"variables": []},
    }


def _write_json(path: Path, data: dict[str, Any]) -> Path:
    path.write_text(json.dumps(data))
    return path


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"flowkit version {__version__}" in result.stdout

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("validate", "inspect", "templates", "chunk", "read"):
            assert command in result.stdout

    def test_missing_env_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--env-file", str(tmp_path / "missing.env"), "templates"])

        assert result.exit_code == 1
        assert ".env file not found" in result.output


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_workflow(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "flow.json", _workflow("Hello"))

        result = runner.invoke(app, ["--no-dotenv", "validate", str(path)])

        assert result.exit_code == 0, result.output
        assert "Workflow valid: 2 nodes, 1 edges" in result.output

    def test_invalid_workflow_exits_nonzero(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "flow.json", _workflow(""))

        result = runner.invoke(app, ["--no-dotenv", "validate", str(path)])

        assert result.exit_code == 1
        assert "Invalid nodes: reply" in result.output

    def test_yaml_workflow_and_json_output(self, tmp_path: Path) -> None:
        path = tmp_path / "flow.yaml"
        path.write_text(yaml.safe_dump(_workflow("")))

        result = runner.invoke(app, ["--no-dotenv", "validate", str(path), "--json"])

        assert result.exit_code == 1
        payload = json.loads(result.stdout.strip().splitlines()[-1])
        assert payload == {"valid": False, "invalidNodeIds": ["reply"]}

    def test_dangling_edges_follow_settings(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "flow.json", _workflow("Hello", extra_edges=[{"source": "reply", "target": "ghost"}]))
        settings = tmp_path / "settings.yaml"
        settings.write_text("validation:\n  check_dangling_edges: true\n")

        lenient = runner.invoke(app, ["--no-dotenv", "validate", str(path)])
        strict = runner.invoke(app, ["--no-dotenv", "validate", str(path), "--settings", str(settings)])

        assert lenient.exit_code == 0, lenient.output
        assert strict.exit_code == 1
        assert "Invalid nodes: reply, ghost" in strict.output

    def test_missing_workflow_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--no-dotenv", "validate", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Workflow file not found" in result.output

    def test_malformed_workflow(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "flow.json", {"nodes": [{"flowNodeType": "answerNode"}]})

        result = runner.invoke(app, ["--no-dotenv", "validate", str(path)])

        assert result.exit_code == 1
        assert "Workflow errors:" in result.output
        assert "nodeId" in result.output or "node_id" in result.output

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        path = tmp_path / "flow.yaml"
        path.write_text("- just\n- a list\n")

        result = runner.invoke(app, ["--no-dotenv", "validate", str(path)])

        assert result.exit_code == 1
        assert "must contain a mapping" in result.output

    def test_missing_settings_file(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "flow.json", _workflow("Hello"))

        result = runner.invoke(app, ["--no-dotenv", "validate", str(path), "--settings", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "Settings file not found" in result.output

    def test_invalid_settings(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "flow.json", _workflow("Hello"))
        settings = tmp_path / "settings.yaml"
        settings.write_text("chunking:\n  chunk_len: 0\n")

        result = runner.invoke(app, ["--no-dotenv", "validate", str(path), "--settings", str(settings)])

        assert result.exit_code == 1
        assert "Configuration errors:" in result.output
        assert "chunking.chunk_len" in result.output


    def test_settings_log_level_applies(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "flow.json", _workflow(""))
        settings = tmp_path / "settings.yaml"
        settings.write_text("log_level: DEBUG\n")

        quiet = runner.invoke(app, ["--no-dotenv", "validate", str(path)])
        debug = runner.invoke(app, ["--no-dotenv", "validate", str(path), "--settings", str(settings)])

        assert "Workflow has invalid nodes" not in quiet.output
        assert "Workflow has invalid nodes" in debug.output

    def test_verbose_wins_over_settings_log_level(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "flow.json", _workflow(""))
        settings = tmp_path / "settings.yaml"
        settings.write_text("log_level: ERROR\n")

        result = runner.invoke(app, ["--no-dotenv", "--verbose", "validate", str(path), "--settings", str(settings)])

        assert "Workflow has invalid nodes" in result.output


class TestInspectCommand:
    """Tests for the inspect command."""

    @staticmethod
    def _chat_workflow(tmp_path: Path) -> Path:
        return _write_json(
            tmp_path / "chat.json",
            {
                "nodes": [
                    {
                        "nodeId": "config",
                        "flowNodeType": "systemConfig",
                        "inputs": [{"key": "chatInputGuide", "value": {"open": True, "textList": ["What can you do?"]}}],
                    },
                    {
                        "nodeId": "chat",
                        "flowNodeType": "chatNode",
                        "inputs": [{"key": "model", "value": "vision-model"}],
                    },
                ],
                "edges": [],
            },
        )

    def test_models_come_from_settings(self, tmp_path: Path) -> None:
        path = self._chat_workflow(tmp_path)
        settings = tmp_path / "settings.yaml"
        settings.write_text("models:\n  vision-model:\n    vision: true\n")

        plain = runner.invoke(app, ["--no-dotenv", "inspect", str(path)])
        configured = runner.invoke(app, ["--no-dotenv", "inspect", str(path), "--settings", str(settings)])

        assert plain.exit_code == 0, plain.output
        assert "File selection: disabled" in plain.stdout
        assert configured.exit_code == 0, configured.output
        assert "File selection: enabled" in configured.stdout

    def test_lists_question_guide(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--no-dotenv", "inspect", str(self._chat_workflow(tmp_path))])

        assert result.exit_code == 0, result.output
        assert "  - What can you do?" in result.stdout

    def test_without_guide(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "flow.json", _workflow("Hello"))

        result = runner.invoke(app, ["--no-dotenv", "inspect", str(path)])

        assert result.exit_code == 0, result.output
        assert "Question guide: (none)" in result.stdout


class TestTemplatesCommand:
    """Tests for the templates command."""

    def test_lists_builtin_kinds(self) -> None:
        result = runner.invoke(app, ["--no-dotenv", "templates"])

        assert result.exit_code == 0
        for kind in ("chatNode", "answerNode", "httpRequest468", "userInput"):
            assert kind in result.stdout


class TestChunkCommand:
    """Tests for the chunk command."""

    def test_plain_text(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.txt"
        path.write_text("first paragraph text\n\nsecond paragraph text")
        settings = tmp_path / "settings.yaml"
        settings.write_text("chunking:\n  overlap_ratio: 0\n")

        result = runner.invoke(app, ["--no-dotenv", "chunk", str(path), "--chunk-len", "25", "--settings", str(settings)])

        assert result.exit_code == 0, result.output
        assert "2 chunks" in result.stdout

    def test_qa_csv(self, tmp_path: Path) -> None:
        path = tmp_path / "qa.csv"
        path.write_text("q,a\nQ1,Answer one\nQ2,Answer two\n")

        result = runner.invoke(app, ["--no-dotenv", "chunk", str(path), "--qa"])

        assert result.exit_code == 0, result.output
        assert "2 chunks" in result.stdout
        assert "answer 10 chars" in result.stdout

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--no-dotenv", "chunk", str(tmp_path / "missing.txt")])

        assert result.exit_code == 1
        assert "File not found" in result.output


class TestReadCommand:
    """Tests for the read command."""

    @respx.mock
    def test_reads_link(self) -> None:
        respx.get("https://example.com/page").mock(
            return_value=httpx.Response(200, text="<nav>Menu</nav><article><p>Article body</p></article>")
        )

        result = runner.invoke(app, ["--no-dotenv", "read", "https://example.com/page", "--selector", "article"])

        assert result.exit_code == 0, result.output
        assert "Article body" in result.stdout
        assert "Menu" not in result.stdout

    @respx.mock
    def test_reads_file(self) -> None:
        respx.get("https://files.example.com/notes.txt").mock(return_value=httpx.Response(200, text="plain notes"))

        result = runner.invoke(app, ["--no-dotenv", "read", "https://files.example.com/notes.txt", "--file"])

        assert result.exit_code == 0, result.output
        assert "plain notes" in result.stdout

    @pytest.mark.parametrize("status", [404, 503])
    @respx.mock
    def test_http_failure(self, status: int) -> None:
        respx.get("https://example.com/down").mock(return_value=httpx.Response(status))

        result = runner.invoke(app, ["--no-dotenv", "read", "https://example.com/down"])

        assert result.exit_code == 1
        assert f"HTTP {status}" in result.output
