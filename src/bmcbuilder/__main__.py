"""
BMC Builder - Main entry point

Allows `python -m bmcbuilder`, delegating to cli.py.
"""

from .cli import cli

if __name__ == "__main__":
    cli()
