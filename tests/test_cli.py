import sys

import pytest

from agentdesk import cli

from conftest import write


@pytest.fixture
def run(settings, monkeypatch):
    monkeypatch.setattr(cli, "get_settings", lambda: settings)

    def _run(*args):
        monkeypatch.setattr(sys, "argv", ["agentdesk", *args])
        cli.main()

    return _run


def test_index_then_search(run, workspace, capsys):
    write(workspace, "MEMORY.md", "# A\nhello deadline\n# B\nworld\n")

    run("index")
    run("search", "deadline")

    out = capsys.readouterr().out
    assert "1. [memory] MEMORY.md (MEMORY.md:1)" in out


def test_stats_and_info(run, workspace, capsys):
    write(workspace, "notes.txt", "alpha\n")
    run("index")
    capsys.readouterr()

    run("stats")
    run("info")

    out = capsys.readouterr().out
    assert "Total chunks: 1" in out
    assert "  txt: 1" in out
    assert "  Indexed files: 1" in out


def test_activity_lists_reindex_pass(run, workspace, capsys):
    write(workspace, "notes.txt", "alpha\n")
    run("index")

    run("activity", "-n", "5")

    assert "[success] reindex: Indexed 1 files" in capsys.readouterr().out


def test_clear(run, workspace, capsys):
    write(workspace, "notes.txt", "alpha\n")
    run("index")

    run("clear", "notes.txt")

    assert "Removed 1 chunks for notes.txt" in capsys.readouterr().out


def test_index_missing_workspace_exits(run, workspace):
    workspace.rmdir()
    with pytest.raises(SystemExit):
        run("index")
