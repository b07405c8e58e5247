"""Desktop launcher entrypoint for the ROI calculator Streamlit app."""

from __future__ import annotations

import os
import pathlib
import sys


def _bundle_root() -> pathlib.Path:
    if getattr(sys, "frozen", False):
        return pathlib.Path(getattr(sys, "_MEIPASS"))
    return pathlib.Path(__file__).resolve().parent


def _runtime_root() -> pathlib.Path:
    if getattr(sys, "frozen", False):
        return pathlib.Path(sys.executable).resolve().parent
    return pathlib.Path(__file__).resolve().parent


def build_streamlit_argv(app_path: pathlib.Path, headless: bool = False) -> list[str]:
    flag = "true" if headless else "false"
    return [
        "streamlit",
        "run",
        str(app_path),
        f"--server.headless={flag}",
        "--browser.gatherUsageStats=false",
    ]


def main() -> None:
    bundle_root = _bundle_root()
    runtime_root = _runtime_root()
    app_path = bundle_root / "app.py"

    # Runtime diagnostics (.local_store) live beside the executable unless overridden.
    os.environ.setdefault("ROI_STORAGE_ROOT", str(runtime_root / ".local_store"))
    os.chdir(runtime_root)

    os.environ.setdefault("STREAMLIT_BROWSER_GATHER_USAGE_STATS", "false")
    headless = os.environ.setdefault("STREAMLIT_SERVER_HEADLESS", "false").lower() == "true"

    from streamlit.web import cli as stcli

    sys.argv = build_streamlit_argv(app_path, headless=headless)
    raise SystemExit(stcli.main())


if __name__ == "__main__":
    main()
