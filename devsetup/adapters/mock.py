"""
Mock runner — universal test double for every external command.

Responses are matched by argv prefix (longest prefix wins), so a test
can script ``["brew", "list"]`` once and cover every package, then
override ``["brew", "list", "ripgrep"]`` for a single one. Handlers
allow stateful fakes (a registry that grows when ``brew install`` runs).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

from devsetup.adapters.base import CommandResult, CommandRunner

Handler = Callable[[list[str]], CommandResult]


class MockRunner(CommandRunner):
    """Scriptable runner for tests and simulated environments.

    By default every command succeeds with empty output and no binary
    is on PATH.
    """

    def __init__(
        self,
        default_returncode: int = 0,
        default_stdout: str = "",
        binaries: Mapping[str, str] | Sequence[str] | None = None,
    ):
        self._default_returncode = default_returncode
        self._default_stdout = default_stdout
        self._handlers: dict[tuple[str, ...], Handler] = {}
        self._binaries: dict[str, str] = {}
        self._call_log: list[list[str]] = []
        for binary in binaries or ():
            path = binaries[binary] if isinstance(binaries, Mapping) else f"/usr/local/bin/{binary}"
            self._binaries[binary] = path

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[list[str]]:
        """Every argv this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls_matching(self, prefix: Sequence[str]) -> list[list[str]]:
        """Recorded calls whose argv starts with ``prefix``."""
        n = len(prefix)
        return [argv for argv in self._call_log if tuple(argv[:n]) == tuple(prefix)]

    def set_response(
        self,
        prefix: Sequence[str],
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        """Return a fixed result for commands starting with ``prefix``."""
        self._handlers[tuple(prefix)] = lambda argv: CommandResult(
            argv=argv, returncode=returncode, stdout=stdout, stderr=stderr,
        )

    def set_failure(self, prefix: Sequence[str], stderr: str = "Mock failure", returncode: int = 1) -> None:
        """Configure commands starting with ``prefix`` to fail."""
        self.set_response(prefix, returncode=returncode, stderr=stderr)

    def set_handler(self, prefix: Sequence[str], handler: Handler) -> None:
        """Compute the result for commands starting with ``prefix``."""
        self._handlers[tuple(prefix)] = handler

    def add_binary(self, name: str, path: str | None = None) -> None:
        self._binaries[name] = path or f"/usr/local/bin/{name}"

    def remove_binary(self, name: str) -> None:
        self._binaries.pop(name, None)

    def which(self, binary: str) -> str | None:
        return self._binaries.get(binary)

    def run(
        self,
        argv: Sequence[str],
        *,
        input: str | None = None,
        env: Mapping[str, str] | None = None,
        capture: bool = True,
    ) -> CommandResult:
        cmd = list(argv)
        self._call_log.append(cmd)

        handler = self._match(cmd)
        if handler is not None:
            return handler(cmd)

        return CommandResult(
            argv=cmd,
            returncode=self._default_returncode,
            stdout=self._default_stdout,
        )

    def reset(self) -> None:
        """Clear the call log and scripted responses."""
        self._call_log.clear()
        self._handlers.clear()

    def _match(self, argv: list[str]) -> Handler | None:
        best: tuple[str, ...] | None = None
        for prefix in self._handlers:
            if tuple(argv[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        return self._handlers[best] if best is not None else None
