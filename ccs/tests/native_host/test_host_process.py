"""Tests that drive the host as a real subprocess over pipes.

The host runs with HOME pointed at a temp directory so its
debug log never touches the real home directory.
"""
from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

from ccs.tests.frames import frame, read_frames

_REPO_ROOT = Path(__file__).resolve().parents[3]


def _run_host(stdin_data: bytes, home: Path) -> subprocess.CompletedProcess[bytes]:
    env = {
        **os.environ,
        "HOME": str(home),
        "PYTHONPATH": str(_REPO_ROOT),
    }
    return subprocess.run(
        [sys.executable, "-m", "ccs.native_host.main", "chrome-extension://abc/"],
        capture_output=True,
        timeout=30,
        check=False,
        env=env,
        input=stdin_data,
    )


class TestHostProcess:
    """End-to-end tests over stdin/stdout."""

    def test_ping_and_save_then_clean_exit(self, tmp_path: Path) -> None:
        """Requests are answered in order and EOF exits cleanly."""
        target = tmp_path / "x" / "y.txt"
        result = _run_host(
            frame({"action": "ping"})
            + frame({
                "action": "save",
                "path": str(target),
                "content": "hi",
            }),
            tmp_path,
        )
        assert result.returncode == 0, result.stderr.decode(errors="replace")
        assert read_frames(result.stdout) == [
            {"success": True},
            {"success": True, "full_path": str(target)},
        ]
        assert target.read_text() == "hi"

    def test_logs_go_to_file_not_stdout(self, tmp_path: Path) -> None:
        """The debug log is written under HOME, stdout stays clean."""
        result = _run_host(frame({"action": "ping"}), tmp_path)
        assert read_frames(result.stdout) == [{"success": True}]
        log_file = tmp_path / ".local" / "lib" / "ccs-host" / "debug.log"
        assert "Ping received" in log_file.read_text()

    def test_malformed_frame_ends_session(self, tmp_path: Path) -> None:
        """A bad payload stops the host with no reply for it."""
        result = _run_host(
            frame({"action": "ping"})
            + frame(b"garbage")
            + frame({"action": "ping"}),
            tmp_path,
        )
        assert read_frames(result.stdout) == [{"success": True}]

    def test_empty_stdin(self, tmp_path: Path) -> None:
        """Closing stdin immediately exits without output."""
        result = _run_host(b"", tmp_path)
        assert result.returncode == 0
        assert result.stdout == b""
