"""Command-line entry point: ``python -m canvas_engine``."""

from canvas_engine.runtime.bootstrap import run_canvas_app


def main() -> None:
    run_canvas_app()


if __name__ == "__main__":
    main()
