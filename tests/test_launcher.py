from __future__ import annotations

from pathlib import Path

import launcher


def test_build_streamlit_argv_points_at_app():
    argv = launcher.build_streamlit_argv(Path("/opt/roi/app.py"))
    assert argv[:3] == ["streamlit", "run", str(Path("/opt/roi/app.py"))]
    assert "--server.headless=false" in argv
    assert "--browser.gatherUsageStats=false" in argv


def test_build_streamlit_argv_headless():
    assert "--server.headless=true" in launcher.build_streamlit_argv(Path("app.py"), headless=True)


def test_bundle_root_is_project_root_when_not_frozen():
    assert (launcher._bundle_root() / "app.py").exists()
    assert launcher._runtime_root() == launcher._bundle_root()
