"""cmdlang CLI entrypoint."""

from cmdlang.cli import app

if __name__ == "__main__":
    app()
