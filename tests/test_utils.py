"""
Tests for the utils module.
"""

from podboot.utils import error, info, section, warn


def test_section_goes_to_stdout(capsys):
    section("Sync")
    out, err = capsys.readouterr()
    assert "=== Sync ===" in out
    assert err == ""


def test_warn_and_error_go_to_stderr(capsys):
    warn("careful")
    error("broken")
    info("plain")
    out, err = capsys.readouterr()
    assert "[WARN] careful" in err
    assert "[ERROR] broken" in err
    assert out == "plain\n"
