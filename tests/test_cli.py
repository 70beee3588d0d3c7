"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from image_vocab import cli
from tests.conftest import FakeClient, gemini_response


@pytest.fixture
def fake_client(monkeypatch):
    """Replace GeminiClient in the CLI with a FakeClient factory."""
    holder = {}

    def install(responses):
        client = FakeClient(responses)

        def factory(model=None):
            holder["model"] = model
            return client

        monkeypatch.setattr(cli, "GeminiClient", factory)
        return client

    install.holder = holder
    return install


def test_cli_shows_table_and_exports(fake_client, image_files, tmp_path):
    fake_client([
        gemini_response([{"englishWord": "menu", "chineseTranslation": "菜單"}]),
        gemini_response([{"englishWord": "Menu", "chineseTranslation": "目錄"},
                         {"englishWord": "exit", "chineseTranslation": "出口"}]),
    ])
    output = tmp_path / "cards.csv"

    result = CliRunner().invoke(cli.main, [*map(str, image_files), "-o", str(output), "--model", "gemini-x"])

    assert result.exit_code == 0, result.output
    assert "menu" in result.output
    assert "出口" in result.output
    assert "目錄" not in result.output
    assert output.read_text(encoding="utf-8") == "English Word,Chinese Translation\nmenu,菜單\nexit,出口\n"
    assert fake_client.holder["model"] == "gemini-x"


def test_cli_localized_header_no_export(fake_client, image_files, tmp_path):
    fake_client([
        gemini_response([{"englishWord": "menu", "chineseTranslation": "菜單"}]),
        gemini_response([]),
    ])
    output = tmp_path / "cards.csv"

    result = CliRunner().invoke(
        cli.main, [*map(str, image_files), "-o", str(output), "--localized-header", "--no-export"]
    )

    assert result.exit_code == 0, result.output
    assert "英文單字" in result.output
    assert not output.exists()


def test_cli_without_images_fails(fake_client):
    client = fake_client([])

    result = CliRunner().invoke(cli.main, [])

    assert result.exit_code == 1
    assert "Please select at least one image first." in result.output
    assert client.calls == []


def test_cli_reports_empty_result(fake_client, image_files, tmp_path):
    fake_client([gemini_response([]), {"candidates": []}])
    output = tmp_path / "cards.csv"

    result = CliRunner().invoke(cli.main, [*map(str, image_files), "-o", str(output)])

    assert result.exit_code == 1
    assert "No prominent English words" in result.output
    assert not output.exists()


def test_format_table_aligns_columns():
    from image_vocab.models import AnalysisResult, WordEntry

    result = AnalysisResult(words=(
        WordEntry(english_word="a", chinese_translation="甲"),
        WordEntry(english_word="longer", chinese_translation="長"),
    ))

    lines = cli.format_table(result, ("English Word", "Chinese Translation")).splitlines()

    assert lines[0].startswith("English Word  Chinese Translation")
    assert lines[2] == "a" + " " * 11 + "  甲"
    assert lines[3] == "longer" + " " * 6 + "  長"


def test_format_table_aligns_wide_characters():
    from image_vocab.models import AnalysisResult, WordEntry

    result = AnalysisResult(words=(
        WordEntry(english_word="cat", chinese_translation="貓"),
        WordEntry(english_word="elephant", chinese_translation="大象"),
    ))

    lines = cli.format_table(result, ("英文單字", "中文翻譯")).splitlines()

    # Header takes eight columns, the same as "elephant"
    assert lines[0] == "英文單字  中文翻譯"
    assert lines[1] == "-" * 8 + "  " + "-" * 8
    assert lines[2] == "cat" + " " * 5 + "  貓"
    assert lines[3] == "elephant  大象"


def test_display_width():
    assert cli.display_width("abc") == 3
    assert cli.display_width("中文") == 4
    assert cli.display_width("ＡＢ") == 4


def test_cli_chinese_messages(fake_client):
    fake_client([])

    result = CliRunner().invoke(cli.main, ["--lang", "zh-TW"])

    assert result.exit_code == 1
    assert "請先選擇至少一張圖片！" in result.output


def test_cli_chinese_empty_message_and_header(fake_client, image_files, tmp_path):
    fake_client([gemini_response([]), gemini_response([])])

    result = CliRunner().invoke(cli.main, [*map(str, image_files), "--lang", "zh-TW", "--no-export"])

    assert result.exit_code == 1
    assert "未從任何圖片中辨識到主要的英文單字。" in result.output
