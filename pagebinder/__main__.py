"""Allow ``python -m pagebinder``."""

from pagebinder.cli import app

if __name__ == "__main__":
    app(prog_name="pagebinder")
