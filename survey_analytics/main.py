from __future__ import annotations

from survey_analytics.UI.dashboard import run_app


def main() -> None:
    """Launch the Streamlit analytics dashboard."""

    run_app()


if __name__ == "__main__":
    main()
