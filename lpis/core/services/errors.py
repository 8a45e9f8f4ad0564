"""
Service errors shared by every executor that shells out.
"""

from __future__ import annotations

import shlex


class ExternalCommandError(RuntimeError):
    """An external program could not be launched or exited non-zero.

    lpis never retries these: there is no partial state to roll back to,
    so the CLI reports them and exits.
    """

    def __init__(self, argv: list[str], reason: str, returncode: int | None = None):
        self.argv = list(argv)
        self.reason = reason
        self.returncode = returncode
        super().__init__(f"{shlex.join(self.argv)}: {reason}")
