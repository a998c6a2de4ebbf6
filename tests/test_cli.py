"""CLI tests using typer's CliRunner with HTTP mocked by respx."""

import json

import httpx
import pytest
import respx
from typer.testing import CliRunner

from auto_anki.cli import app
from tests.fixtures import cards_json, chat_completion

OPENAI_COMPLETIONS = "https://api.openai.com/v1/chat/completions"

runner = CliRunner()


@pytest.fixture
def vault(temp_dir):
    root = temp_dir / "vault"
    (root / "attachments").mkdir(parents=True)
    (root / "attachments" / "cell.png").write_bytes(b"cell-bytes")
    (root / "Biology.md").write_text(
        "# Cells\nMitochondria make ATP.\n![Cell](cell.png)\n", encoding="utf-8"
    )
    return root


@pytest.fixture
def config_file(temp_dir, vault):
    def _write(**overrides):
        values = {"openai_api_key": "sk-test", "vault_path": str(vault), **overrides}
        path = temp_dir / "config.yaml"
        path.write_text(
            "".join(f"{key}: {json.dumps(value)}\n" for key, value in values.items()),
            encoding="utf-8",
        )
        return path

    return _write


def test_help_lists_commands():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "generate-note" in result.output
    assert "generate-file" in result.output


@respx.mock
def test_generate_note_writes_json(vault, config_file, temp_dir):
    route = respx.post(OPENAI_COMPLETIONS).mock(
        return_value=httpx.Response(
            200, json=chat_completion(cards_json(("What makes ATP?", "Mitochondria")))
        )
    )
    output = temp_dir / "out" / "cards.json"

    result = runner.invoke(
        app,
        [
            "generate-note",
            str(vault / "Biology.md"),
            "--config",
            str(config_file()),
            "--output",
            str(output),
        ],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data == {"choices": [[{"question": "What makes ATP?", "answer": "Mitochondria"}]]}
    payload = json.loads(route.calls.last.request.content)
    # Whole-note mode uses the file defaults: 5 questions, one choice
    assert payload["max_tokens"] == 500
    assert payload["n"] == 1
    assert "Mitochondria make ATP." in payload["messages"][-1]["content"]


@respx.mock
def test_generate_note_selection_uses_selection_defaults(vault, config_file):
    route = respx.post(OPENAI_COMPLETIONS).mock(
        return_value=httpx.Response(200, json=chat_completion(cards_json(("Q", "A"))))
    )

    result = runner.invoke(
        app,
        [
            "generate-note",
            str(vault / "Biology.md"),
            "--selection",
            "ATP is the energy currency.",
            "--alternatives",
            "1",
            "--config",
            str(config_file()),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Choice 1" in result.output
    payload = json.loads(route.calls.last.request.content)
    assert payload["max_tokens"] == 100
    assert payload["n"] == 2
    assert payload["messages"][-1]["content"] == "\nATP is the energy currency.\n"


@respx.mock
def test_generate_note_with_media(vault, config_file):
    route = respx.post(OPENAI_COMPLETIONS).mock(
        return_value=httpx.Response(200, json=chat_completion(cards_json(("Q", "A"))))
    )

    result = runner.invoke(
        app,
        [
            "generate-note",
            str(vault / "Biology.md"),
            "--config",
            str(config_file(multimodal_enabled=True)),
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(route.calls.last.request.content)
    assert payload["model"] == "gpt-4o"
    assert payload["messages"][-1]["content"][1]["type"] == "image_url"


@respx.mock
def test_generate_note_failure_exits_nonzero(vault, config_file):
    respx.post(OPENAI_COMPLETIONS).mock(return_value=httpx.Response(401))

    result = runner.invoke(
        app, ["generate-note", str(vault / "Biology.md"), "--config", str(config_file())]
    )

    assert result.exit_code == 1
    assert "No flashcards were generated" in result.output


@respx.mock
def test_generate_file(vault, config_file):
    route = respx.post(OPENAI_COMPLETIONS).mock(
        return_value=httpx.Response(200, json=chat_completion(cards_json(("Q", "A"))))
    )

    result = runner.invoke(
        app,
        [
            "generate-file",
            str(vault / "attachments" / "cell.png"),
            "-n",
            "2",
            "--config",
            str(config_file(multimodal_enabled=True)),
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(route.calls.last.request.content)
    assert payload["max_tokens"] == 200
    assert payload["messages"][-1]["content"][1]["image_url"]["url"].startswith(
        "data:image/png;base64,"
    )


def test_generate_file_requires_multimodal(vault, config_file):
    result = runner.invoke(
        app,
        ["generate-file", str(vault / "attachments" / "cell.png"), "--config", str(config_file())],
    )

    assert result.exit_code == 1
    assert "Multimodal processing is disabled" in result.output


def test_check_offline_reports_missing_key(config_file):
    result = runner.invoke(
        app, ["check", "--offline", "--config", str(config_file(openai_api_key=None))]
    )

    assert result.exit_code == 1
    assert "FAIL" in result.output
    assert "AI configuration" in result.output


def test_check_offline_passes_with_key(config_file):
    result = runner.invoke(app, ["check", "--offline", "--config", str(config_file())])

    assert result.exit_code == 0, result.output
    assert "PASS" in result.output
