"""Entry point for SmartCombo."""

from __future__ import annotations


def main() -> None:
    from SmartCombo.app import run_server

    run_server()


if __name__ == "__main__":
    main()
