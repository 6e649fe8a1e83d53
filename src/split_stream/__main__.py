"""Allow ``python -m split_stream`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m split_stream`` behaves identically to the ``split-stream``
console script.
"""

from __future__ import annotations

from split_stream.cli.app import cli

if __name__ == "__main__":
    cli()
