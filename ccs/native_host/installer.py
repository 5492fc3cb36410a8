"""Native messaging host installer for Linux and macOS.

Writes a launcher script for the host, makes it executable,
detects installed Chromium browsers, and places manifest
JSON files in each browser's NativeMessagingHosts directory.
"""
from __future__ import annotations

import json
import shlex
import sys
from pathlib import Path
from typing import Any

import click
from returns.io import IOFailure
from returns.unsafe import unsafe_perform_io

from ccs.native_host import io_ops
from ccs.native_host.config import HOST_NAME, INSTALL_DIR

LAUNCHER_NAME = "ccs-host"


def _browser(name: str, manifest_dir: str) -> dict[str, str]:
    return {
        "name": name,
        "manifest_dir": str(Path(manifest_dir).expanduser()),
    }


BROWSERS_MACOS: list[dict[str, str]] = [
    _browser(
        "Google Chrome",
        "~/Library/Application Support/Google/Chrome/NativeMessagingHosts",
    ),
    _browser(
        "Brave Browser",
        "~/Library/Application Support/BraveSoftware/Brave-Browser/"
        "NativeMessagingHosts",
    ),
    _browser(
        "Microsoft Edge",
        "~/Library/Application Support/Microsoft Edge/NativeMessagingHosts",
    ),
    _browser(
        "Chromium",
        "~/Library/Application Support/Chromium/NativeMessagingHosts",
    ),
]

BROWSERS_LINUX: list[dict[str, str]] = [
    _browser(
        "Google Chrome",
        "~/.config/google-chrome/NativeMessagingHosts",
    ),
    _browser(
        "Brave Browser",
        "~/.config/BraveSoftware/Brave-Browser/NativeMessagingHosts",
    ),
    _browser(
        "Microsoft Edge",
        "~/.config/microsoft-edge/NativeMessagingHosts",
    ),
    _browser(
        "Chromium",
        "~/.config/chromium/NativeMessagingHosts",
    ),
]


def browsers_for_platform(
    platform: str | None = None,
) -> list[dict[str, str]] | None:
    """Return candidate browsers, or None if unsupported."""
    if platform is None:
        platform = sys.platform
    if platform == "darwin":
        return BROWSERS_MACOS
    if platform.startswith("linux"):
        return BROWSERS_LINUX
    return None


def build_manifest(
    host_path: str,
    extension_ids: list[str],
) -> dict[str, Any]:
    """Build the native messaging host manifest dict."""
    return {
        "name": HOST_NAME,
        "description": "Saves files from the browser to local paths",
        "path": host_path,
        "type": "stdio",
        "allowed_origins": [
            f"chrome-extension://{ext_id}/" for ext_id in extension_ids
        ],
    }


def build_launcher(python: str = sys.executable) -> str:
    """Build the shell launcher that starts the host module."""
    return (
        "#!/bin/sh\n"
        f'exec {shlex.quote(python)} -m ccs.native_host.main "$@"\n'
    )


def detect_installed_browsers(
    browsers: list[dict[str, str]],
) -> list[dict[str, str]]:
    """Detect which Chromium browsers are installed.

    A browser counts as installed when the parent of its
    NativeMessagingHosts directory exists.
    """
    installed: list[dict[str, str]] = []
    for browser in browsers:
        parent_dir = str(Path(browser["manifest_dir"]).parent)
        if io_ops.path_exists(parent_dir):
            installed.append(browser)
    return installed


def install_launcher(install_dir: str) -> str | None:
    """Write the executable launcher script.

    Returns the launcher path, or None on failure.
    """
    launcher_path = str(Path(install_dir) / LAUNCHER_NAME)
    result = (
        io_ops.makedirs(install_dir)
        .bind(lambda _: io_ops.write_file(launcher_path, build_launcher()))
        .bind(lambda _: io_ops.chmod_executable(launcher_path))
    )
    if isinstance(result, IOFailure):
        error = unsafe_perform_io(result.failure())
        io_ops.print_output(f"Failed to install launcher: {error.message}")
        return None
    return launcher_path


def install_manifest_for_browser(
    browser: dict[str, str],
    manifest: dict[str, Any],
) -> dict[str, Any]:
    """Install the manifest JSON for a single browser.

    Returns a result dict with browser name, success status,
    and optional error.
    """
    manifest_path = str(
        Path(browser["manifest_dir"]) / f"{HOST_NAME}.json",
    )
    result = io_ops.makedirs(browser["manifest_dir"]).bind(
        lambda _: io_ops.write_file(
            manifest_path,
            json.dumps(manifest, indent=2) + "\n",
        ),
    )
    if isinstance(result, IOFailure):
        error = unsafe_perform_io(result.failure())
        return {
            "browser": browser["name"],
            "success": False,
            "error": error.message,
        }
    return {"browser": browser["name"], "success": True}


def format_summary(results: list[dict[str, Any]]) -> str:
    """Format installation results as a human-readable summary."""
    if not results:
        return (
            "No Chromium browsers detected. "
            "No manifests were installed."
        )
    lines = ["Installation summary:"]
    for result in results:
        name = result["browser"]
        if result["success"]:
            lines.append(f"  {name}: OK")
        else:
            error = result.get("error", "unknown error")
            lines.append(f"  {name}: FAIL ({error})")
    return "\n".join(lines)


def install_host(
    extension_ids: list[str],
    *,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Install the launcher and per-browser manifests.

    On unsupported platforms prints a message and installs
    nothing. With dry_run, prints the manifest only.
    """
    browsers = browsers_for_platform()
    if browsers is None:
        io_ops.print_output(
            f"Platform {sys.platform!r} is not supported. "
            "Install the manifest manually.",
        )
        return {"unsupported_platform": True, "results": []}

    if dry_run:
        launcher_path = str(Path(INSTALL_DIR) / LAUNCHER_NAME)
        manifest = build_manifest(launcher_path, extension_ids)
        io_ops.print_output(json.dumps(manifest, indent=2))
        return {"dry_run": True, "results": []}

    launcher_path = install_launcher(str(INSTALL_DIR))
    if launcher_path is None:
        return {"launcher_failed": True, "results": []}

    manifest = build_manifest(launcher_path, extension_ids)
    results = [
        install_manifest_for_browser(browser, manifest)
        for browser in detect_installed_browsers(browsers)
    ]

    summary = format_summary(results)
    io_ops.print_output(summary)
    return {"results": results, "summary": summary}


@click.command()
@click.option(
    "--extension-id",
    "extension_ids",
    multiple=True,
    required=True,
    help="Chrome extension ID allowed to connect (repeatable)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the manifest without installing anything",
)
def cli(extension_ids: tuple[str, ...], dry_run: bool) -> None:
    """Register the ccs native messaging host with installed browsers."""
    outcome = install_host(list(extension_ids), dry_run=dry_run)
    if outcome.get("launcher_failed"):
        sys.exit(1)
    if any(not r["success"] for r in outcome["results"]):
        sys.exit(1)


if __name__ == "__main__":
    cli()
