"""Tests for command-line argument parsing."""

import pytest

from args import parse_args


class TestParseArgs:
    """Test CLI argument parsing."""

    def test_defaults(self):
        ns = parse_args(["reconcile"])
        assert ns.command == "reconcile"
        assert ns.ROOT == "."
        assert ns.CONFIG is None
        assert ns.MERGE is False
        assert ns.DRY_RUN is False
        assert ns.WORKERS is None
        assert ns.LOG_LEVEL == "INFO"

    def test_flags(self):
        ns = parse_args(["init", "--root", "/ws", "-c", "mono.yml", "--merge", "--dry-run",
                         "-w", "4", "--loglevel", "DEBUG", "--logfile", "out.log"])
        assert ns.command == "init"
        assert ns.ROOT == "/ws"
        assert ns.CONFIG == "mono.yml"
        assert ns.MERGE is True
        assert ns.DRY_RUN is True
        assert ns.WORKERS == 4
        assert ns.LOG_LEVEL == "DEBUG"
        assert ns.LOG_FILE == "out.log"

    def test_command_case_insensitive(self):
        assert parse_args(["Build"]).command == "build"

    def test_unknown_command(self):
        with pytest.raises(SystemExit):
            parse_args(["deploy"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])
