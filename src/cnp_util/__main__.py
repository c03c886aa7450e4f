"""Entry point for running cnp_util as a module.

This allows the package to be executed as:
    python -m cnp_util
"""

from cnp_util.cli.main import cli

if __name__ == "__main__":
    cli()
