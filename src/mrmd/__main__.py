"""Allow ``python -m mrmd``."""

from mrmd.ui.cli import main


if __name__ == "__main__":
    main()
