"""Tests for the focusctl command-line client (HTTP calls stubbed out)."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

import focusd.cli as cli

EMPTY = {"name": None, "until": None}


@pytest.fixture
def calls(monkeypatch):
    """Record every request and answer from a canned table."""
    recorded = []
    replies = {}

    def fake_request(url, method="GET", body=None):
        recorded.append((method, url, body))
        return replies.get((method, url.rsplit("/", 1)[-1]), {"status": "ok"})

    monkeypatch.setattr(cli, "_request", fake_request)
    monkeypatch.setattr(cli, "time", SimpleNamespace(time=lambda: 1000.4))
    return recorded, replies


def test_minutes_from_now():
    assert cli.minutes_from_now(5, now=1000.4) == 1300


class TestSummarize:
    def test_idle(self):
        s = {"pause": EMPTY, "override": EMPTY, "schedule": EMPTY}
        assert cli.summarize(s) == "No focus schedule is active"

    def test_pause_wins(self, monkeypatch):
        monkeypatch.setattr(cli, "clock_time", lambda ts: f"<{ts}>")
        s = {
            "pause": {"name": None, "until": 1060},
            "override": {"name": "Work", "until": 2000},
            "schedule": EMPTY,
        }
        assert cli.summarize(s) == "Focus is paused until <1060>"

    def test_override(self, monkeypatch):
        monkeypatch.setattr(cli, "clock_time", lambda ts: f"<{ts}>")
        s = {"pause": EMPTY, "override": {"name": "Work", "until": 2000}, "schedule": EMPTY}
        assert cli.summarize(s) == "Focusing using 'Work' until <2000>"

    def test_schedule(self, monkeypatch):
        monkeypatch.setattr(cli, "clock_time", lambda ts: f"<{ts}>")
        s = {"pause": EMPTY, "override": EMPTY, "schedule": {"name": "Deep", "until": 3000}}
        assert cli.summarize(s) == "Planned focus using 'Deep' until <3000>"


class TestCommands:
    def test_pause_posts_until(self, calls, capsys):
        recorded, _ = calls
        assert cli.main(["pause", "15"]) == 0
        method, url, body = recorded[0]
        assert (method, url) == ("POST", "http://localhost:9029/pause")
        assert body == {"until": 1000 + 15 * 60}
        assert "paused for 15 minutes" in capsys.readouterr().out

    def test_override_posts_name_and_until(self, calls):
        recorded, _ = calls
        assert cli.main(["--port", "9100", "override", "Deep Focus", "30"]) == 0
        method, url, body = recorded[0]
        assert url == "http://localhost:9100/override"
        assert body == {"name": "Deep Focus", "until": 1000 + 30 * 60}

    def test_error_payload_is_reported(self, calls, capsys):
        _, replies = calls
        replies[("POST", "pause")] = {"status": "error", "message": "until: Field required"}
        assert cli.main(["pause", "1"]) == 1
        assert "Field required" in capsys.readouterr().err

    def test_cancel_sends_delete(self, calls):
        recorded, _ = calls
        assert cli.main(["cancel", "override"]) == 0
        assert recorded[0][:2] == ("DELETE", "http://localhost:9029/override")

    def test_configurations(self, calls, capsys):
        _, replies = calls
        replies[("GET", "configurations")] = ["Work", "Deep Focus"]
        assert cli.main(["configurations"]) == 0
        assert capsys.readouterr().out.splitlines() == ["Work", "Deep Focus"]

    def test_non_positive_minutes_rejected(self, calls):
        with pytest.raises(SystemExit):
            cli.main(["pause", "0"])

    def test_unreachable_daemon(self, monkeypatch, capsys):
        def boom(url, method="GET", body=None):
            raise cli.DaemonUnreachable("focus daemon unreachable")

        monkeypatch.setattr(cli, "_request", boom)
        assert cli.main(["status"]) == 2
        assert "unreachable" in capsys.readouterr().err
