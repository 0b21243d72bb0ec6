"""
Entry point for running wpxmlrpc as a module: python -m wpxmlrpc
"""

from wpxmlrpc.cli.commands import app

if __name__ == "__main__":
    app()
