"""Allow ``python -m collider``."""

from collider.cli import run

if __name__ == "__main__":
    run()
