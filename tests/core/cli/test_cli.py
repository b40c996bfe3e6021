"""Tests for the CLI entry point."""

import json
import os

import pytest
from click.testing import CliRunner

from navstack.core.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_config_file):
    """Invoke the CLI against the temp config and the local data directory."""

    def _invoke(*args):
        return runner.invoke(main, ["--config", tmp_config_file, "--local", *args])

    return _invoke


class TestCliGroup:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "navigation site" in result.output
        for command in ("files", "show", "add", "update", "delete", "search", "updates", "export-bookmarks"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_github_store_requires_credentials(self, runner, tmp_config_file):
        result = runner.invoke(main, ["--config", tmp_config_file, "files"])
        assert result.exit_code == 1
        assert "github.token" in result.output


class TestLinkCommands:
    def test_add_search_update_delete(self, invoke, tmp_dir):
        result = invoke(
            "add", "tools.yml", "--taxonomy", "Tools", "--term", "CLI",
            "--title", "ripgrep", "--url", "https://rg.dev", "--logo", "https://rg.dev/l.png",
            "--description", "fast grep",
        )
        assert result.exit_code == 0, result.output
        assert "Added 'ripgrep' to tools.yml." in result.output
        assert os.path.exists(os.path.join(tmp_dir, "data", "tools.yml"))

        result = invoke("search", "tools.yml", "grep")
        assert result.exit_code == 0
        assert [link["title"] for link in json.loads(result.stdout)] == ["ripgrep"]

        result = invoke("update", "tools.yml", "ripgrep", "--description", "recursive grep")
        assert result.exit_code == 0
        assert "Updated 1 link(s)." in result.output

        result = invoke("show", "tools.yml")
        assert result.output.startswith("---\n")
        assert "recursive grep" in result.output

        result = invoke("delete", "tools.yml", "ripgrep")
        assert result.exit_code == 0
        assert "Deleted 1 link(s)." in result.output

    def test_files(self, invoke):
        invoke("add", "b.yml", "--taxonomy", "T", "--title", "x", "--url", "u", "--logo", "l", "--description", "d")
        invoke("add", "a.yaml", "--taxonomy", "T", "--title", "x", "--url", "u", "--logo", "l", "--description", "d")
        result = invoke("files")
        assert result.exit_code == 0
        assert json.loads(result.stdout) == ["a.yaml", "b.yml"]

    def test_add_missing_fields(self, invoke, tmp_dir):
        result = invoke("add", "tools.yml", "--taxonomy", "Tools", "--title", "x")
        assert result.exit_code == 1
        assert "Missing required field(s): url, logo, description" in result.output
        assert not os.path.exists(os.path.join(tmp_dir, "data", "tools.yml"))

    def test_update_needs_a_change(self, invoke):
        result = invoke("update", "tools.yml", "ripgrep")
        assert result.exit_code == 2

    def test_delete_unknown_title(self, invoke):
        invoke("add", "tools.yml", "--taxonomy", "T", "--title", "x", "--url", "u", "--logo", "l", "--description", "d")
        result = invoke("delete", "tools.yml", "nope")
        assert result.exit_code == 1
        assert "No link titled 'nope' in tools.yml" in result.output


class TestUpdatesCommands:
    def test_no_updates_yet(self, invoke):
        result = invoke("updates")
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"message": "No updates yet"}

    def test_updates_survive_between_invocations(self, invoke, tmp_dir):
        for title in ("first", "second"):
            invoke("add", "t.yml", "--taxonomy", "T", "--title", title, "--url", "u", "--logo", "l", "--description", "d")

        result = invoke("updates")
        assert [item["title"] for item in json.loads(result.stdout)] == ["second", "first"]
        assert os.path.exists(os.path.join(tmp_dir, "static", "rss.xml"))

    def test_export_bookmarks(self, invoke, tmp_dir):
        invoke("add", "t.yml", "--taxonomy", "T", "--title", "x", "--url", "https://x.com", "--logo", "l", "--description", "d")

        result = invoke("export-bookmarks")

        assert result.exit_code == 0, result.output
        path = os.path.join(tmp_dir, "static", "bookmarks", "bookmarks.html")
        assert result.output.strip() == path
        with open(path, encoding="utf-8") as f:
            assert '<A HREF="https://x.com">x</A>' in f.read()

    def test_corrupt_state_file_is_reported(self, invoke, tmp_dir):
        state = os.path.join(tmp_dir, "state", "notifications.json")
        os.makedirs(os.path.dirname(state))
        with open(state, "w", encoding="utf-8") as f:
            json.dump([{"title": "A", "date": "yesterday"}], f)

        result = invoke("files")

        assert result.exit_code == 1
        assert "Invalid notification entry" in result.output
