"""
Windows drive provider built on the ``net use`` command.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import List, Optional

from ..domain.exceptions import ProviderError
from ..domain.models import UNC_PREFIX, BindingState, Credential

logger = logging.getLogger(__name__)

# "The network connection could not be found."
NOT_FOUND_ERROR_CODE = "2250"

# net.exe writes in the console (OEM) codepage, not the ANSI one.
OUTPUT_ENCODING = "oem" if sys.platform == "win32" else "utf-8"


class NetUseDriveProvider:
    """
    Queries, binds and unbinds drive letters with ``net use``.

    All calls block until the command returns or ``timeout_seconds``
    elapses; a timeout is reported as a ``ProviderError``.
    """

    def __init__(self, persistent: bool = True, timeout_seconds: float = 60.0):
        self.persistent = persistent
        self.timeout_seconds = timeout_seconds

    def query_mapping(self, letter: str) -> BindingState:
        """Return the current binding of ``letter`` as reported by ``net use X:``."""
        result = self._run(["net", "use", f"{letter}:"], letter)

        if result.returncode != 0:
            output = f"{result.stdout}\n{result.stderr}"
            if NOT_FOUND_ERROR_CODE in output or "could not be found" in output.lower():
                return BindingState(exists=False)
            raise ProviderError(
                f"net use {letter}: failed: {self._error_text(result)}", letter=letter
            )

        target = self._parse_remote_name(result.stdout)
        if target is None:
            raise ProviderError(
                f"Could not read remote name for {letter}: from net use output", letter=letter
            )
        return BindingState(exists=True, target=target)

    def bind(self, letter: str, target: str, credential: Optional[Credential] = None) -> None:
        """Bind ``letter`` to ``target`` with ``net use X: \\\\server\\share``."""
        cmd = ["net", "use", f"{letter}:", target]
        if credential is not None:
            cmd += [credential.secret.get_secret_value(), f"/user:{credential.principal}"]
            logger.debug("Binding %s: to %s as %s", letter, target, credential.principal)
        else:
            logger.debug("Binding %s: to %s with current logon", letter, target)
        cmd.append(f"/persistent:{'yes' if self.persistent else 'no'}")

        result = self._run(cmd, letter)
        if result.returncode != 0:
            raise ProviderError(
                f"Could not map {letter}: to {target}: {self._error_text(result)}", letter=letter
            )

    def unbind(self, letter: str) -> None:
        """Remove the binding of ``letter`` with ``net use X: /delete``."""
        result = self._run(["net", "use", f"{letter}:", "/delete", "/y"], letter)
        if result.returncode != 0:
            raise ProviderError(
                f"Could not remove {letter}: {self._error_text(result)}", letter=letter
            )

    def _run(self, cmd: List[str], letter: str) -> subprocess.CompletedProcess:
        # The command line may carry a password, so it is never logged or
        # echoed back in error messages.
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired:
            raise ProviderError(
                f"net use timed out after {self.timeout_seconds:g}s for {letter}:", letter=letter
            ) from None
        except OSError as exc:
            raise ProviderError(f"Could not run net use: {exc}", letter=letter) from exc

        return subprocess.CompletedProcess(
            result.args,
            result.returncode,
            self._decode(result.stdout),
            self._decode(result.stderr),
        )

    @staticmethod
    def _decode(data: Optional[bytes]) -> str:
        return (data or b"").decode(OUTPUT_ENCODING, errors="replace")

    @staticmethod
    def _parse_remote_name(output: str) -> Optional[str]:
        """
        Extract the share from ``net use X:`` output.

        Output format (labels are localized, e.g. "Remotename" on German hosts):
            Local name        H:
            Remote name       \\\\server\\share
            Resource type     Disk
            ...

        The share is the only value starting with ``\\\\``.
        """
        for line in output.splitlines():
            start = line.find(UNC_PREFIX)
            if start != -1:
                return line[start:].strip() or None
        return None

    @staticmethod
    def _error_text(result: subprocess.CompletedProcess) -> str:
        text = (result.stderr or result.stdout or "").strip()
        return " ".join(text.split()) or f"exit code {result.returncode}"
