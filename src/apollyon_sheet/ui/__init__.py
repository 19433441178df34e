"""UI module for the Apollyon character sheet.

This module provides the Streamlit-based sheet editor.

Submodules:
    app: The character sheet page
    theme: Styling, per-mote accents and small HTML components

Usage:
    Run the application with:
        streamlit run src/apollyon_sheet/ui/app.py

    Or start it programmatically (also installed as ``apollyon-sheet``):
        from apollyon_sheet.ui import run_app
        run_app()
"""

from __future__ import annotations


def run_app() -> None:
    """Run the Streamlit application.

    This launches a subprocess running streamlit on the sheet page.
    """
    import subprocess
    import sys
    from pathlib import Path

    app_path = Path(__file__).parent / "app.py"
    subprocess.run([sys.executable, "-m", "streamlit", "run", str(app_path)], check=False)


__all__ = [
    "run_app",
]
