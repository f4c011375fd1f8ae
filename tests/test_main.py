"""Tests for application orchestration in the main module."""

import json
import sys
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from conftest import build, epoch
from release_tracker.errors import AuthenticationError, RenderError
from release_tracker.main import orchestrate_release_tracking


@pytest.fixture
def drone_env(monkeypatch):
    monkeypatch.setenv("DRONE_SERVER", "https://drone.example.com")
    monkeypatch.setenv("DRONE_TOKEN", "secret")


def _fake_drone(pages_by_repo):
    """Return a DroneClient stand-in serving builds per ``namespace/name``."""
    client = Mock()

    def _list_builds(repo, page, size):
        pages = pages_by_repo[repo.slug]
        return pages[page - 1] if page <= len(pages) else []

    client.list_builds.side_effect = _list_builds
    return client


def test_end_to_end_json_output(drone_env, capsys):
    """Verify a JSON run over two repositories counts only in-window production promotions."""
    pages = {
        "a/b": [
            [
                build(epoch(2023, 1, 10), build_id=1),
                build(epoch(2023, 1, 10), event="push", build_id=2),
                build(epoch(2023, 2, 14), build_id=3),
            ],
            [
                build(epoch(2022, 12, 30), build_id=4),
                build(epoch(2023, 1, 2), deploy_to="staging", build_id=5),
            ],
        ],
        "c/d": [
            [
                build(epoch(2023, 1, 10), build_id=6),
                build(epoch(2023, 3, 30), build_id=7),
                build(epoch(2023, 4, 15), build_id=8),
            ],
        ],
    }
    client = _fake_drone(pages)

    with patch("release_tracker.main.DroneClient", return_value=client):
        exit_code = orchestrate_release_tracking(
            ["--repos", "a/b,c/d", "--from", "2023-01-01", "--to", "2023-03-31", "--output", "json"]
        )

    assert exit_code == 0
    out = capsys.readouterr().out
    counts = json.loads(out)
    assert counts == {"2023-01-10": 2, "2023-02-14": 1, "2023-03-30": 1}
    assert sum(counts.values()) == 4
    assert all("2023-01-01" <= day <= "2023-03-31" for day in counts)
    assert "\n  " in out


def test_image_output_uses_heatmap_renderer(drone_env, capsys):
    """Verify non-JSON output is delegated to the heatmap renderer."""
    client = _fake_drone({"a/b": [[build(epoch(2023, 1, 10))]]})
    renderer = Mock()

    with patch("release_tracker.main.DroneClient", return_value=client), patch(
        "release_tracker.main.CalendarHeatmapRenderer", return_value=renderer
    ) as renderer_ctor, patch("release_tracker.main.emit_report") as emit_mock:
        exit_code = orchestrate_release_tracking(
            ["--repos", "a/b", "--from", "2023-01-01", "--to", "2023-03-31", "--output", "png"]
        )

    assert exit_code == 0
    renderer_ctor.assert_called_once_with(command="calendarheatmap", assets_path=None)
    emit_mock.assert_called_once_with({"2023-01-10": 1}, "png", renderer=renderer)


def test_malformed_repo_exits_one_without_network(drone_env, capsys):
    """Verify a malformed repository aborts before any Drone client is created."""
    with patch("release_tracker.main.DroneClient") as client_ctor:
        exit_code = orchestrate_release_tracking(["--repos", "a/b,broken", "--output", "json"])

    assert exit_code == 1
    client_ctor.assert_not_called()
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error: Drone repository should be made of <namespace>/<name>" in captured.err


def test_missing_token_returns_auth_exit_code(monkeypatch, capsys):
    monkeypatch.setenv("DRONE_SERVER", "https://drone.example.com")
    monkeypatch.delenv("DRONE_TOKEN", raising=False)

    exit_code = orchestrate_release_tracking(["--output", "json"])

    assert exit_code == 3
    assert "DRONE_TOKEN" in capsys.readouterr().err


def test_rejected_token_returns_auth_exit_code(drone_env):
    """Verify a token rejected by the server is fatal rather than empty history."""
    client = Mock()
    client.list_builds.side_effect = AuthenticationError("rejected")

    with patch("release_tracker.main.DroneClient", return_value=client):
        exit_code = orchestrate_release_tracking(["--output", "json"])

    assert exit_code == 3


def test_render_failure_returns_render_exit_code(drone_env, capsys):
    client = _fake_drone({"octocat/demo": []})

    with patch("release_tracker.main.DroneClient", return_value=client), patch(
        "release_tracker.main.emit_report", side_effect=RenderError("font missing")
    ):
        exit_code = orchestrate_release_tracking([])

    assert exit_code == 4
    assert "font missing" in capsys.readouterr().err


def test_unexpected_error_returns_generic_exit_code(drone_env):
    """Verify unexpected exceptions are mapped to the generic non-zero exit code."""
    with patch("release_tracker.main.collect_releases", side_effect=RuntimeError("boom")):
        exit_code = orchestrate_release_tracking(["--output", "json"])

    assert exit_code == 1


@pytest.mark.parametrize(
    "argv",
    [
        ["--output", "bmp"],
        ["--page-size", "0"],
        ["--page-order", "sideways"],
        ["--unknown-flag"],
    ],
)
def test_invalid_flags_exit_one_with_error_on_stderr(drone_env, capsys, argv):
    """Verify bad command-line values exit 1 and report on stderr only."""
    with patch("release_tracker.main.DroneClient") as client_ctor:
        exit_code = orchestrate_release_tracking(argv)

    assert exit_code == 1
    client_ctor.assert_not_called()
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error:" in captured.err


def test_help_exits_zero(capsys):
    assert orchestrate_release_tracking(["--help"]) == 0
    assert "drone-release-tracker" in capsys.readouterr().out
