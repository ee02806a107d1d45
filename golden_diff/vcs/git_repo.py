"""Git adapter — runs the git CLI as an asyncio subprocess."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


class GitCommandError(RuntimeError):
    """A git command exited non-zero or timed out."""

    def __init__(self, git_args: tuple[str, ...], returncode: Optional[int], stderr: str = ""):
        self.git_args = git_args
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr or ("timed out" if returncode is None else f"exit code {returncode}")
        super().__init__(f"git {' '.join(git_args)} failed: {detail}")


@dataclass(frozen=True)
class _GitResult:
    stdout: bytes
    stderr: str
    returncode: int

    @property
    def text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace").strip()


class GitRepo:
    """Version-control client backed by the local ``git`` executable.

    User-supplied refs always follow ``--end-of-options`` so that input such as
    ``--all`` is never parsed as a git option.
    """

    GIT_TIMEOUT_SECONDS = 60

    def __init__(self, working_dir: str = ".", timeout_seconds: float = GIT_TIMEOUT_SECONDS):
        self.working_dir = working_dir
        self.timeout_seconds = timeout_seconds

    async def _run_git(self, *args: str) -> _GitResult:
        """Run ``git <args>`` and return its output without checking the exit code.

        Raises:
            GitCommandError: if the command does not finish within the timeout.
        """
        logger.debug("Running git %s", " ".join(args))
        proc = await asyncio.create_subprocess_exec(
            "git", *args,
            cwd=self.working_dir,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            raise GitCommandError(args, None)
        return _GitResult(
            stdout=stdout,
            stderr=stderr.decode("utf-8", errors="replace").strip(),
            returncode=proc.returncode,
        )

    async def _check_git(self, *args: str) -> _GitResult:
        result = await self._run_git(*args)
        if result.returncode != 0:
            logger.error("git %s exited %d: %s", " ".join(args), result.returncode, result.stderr)
            raise GitCommandError(args, result.returncode, result.stderr)
        return result

    async def refresh_remotes(self) -> None:
        await self._check_git("fetch", "--all", "--tags", "--quiet")
        logger.debug("Fetched remotes in %s", self.working_dir)

    async def resolve_symbolic_name(self, ref: str) -> Optional[str]:
        # --verify rejects ranges and anything that is not exactly one revision.
        result = await self._run_git(
            "rev-parse", "--verify", "--quiet", "--symbolic-full-name", "--end-of-options", ref,
        )
        if result.returncode != 0:
            logger.debug("No ref named '%s'", ref)
            return None
        # Commit hashes resolve successfully but have no symbolic name.
        lines = result.text.splitlines()
        return lines[0] if lines else None

    async def list_remote_names(self) -> list[str]:
        result = await self._check_git("remote")
        return [line.strip() for line in result.text.splitlines() if line.strip()]

    async def resolve_short_commit_hash(self, ref: str) -> str:
        # ^{commit} peels annotated tags to the commit they point at.
        result = await self._check_git(
            "rev-parse", "--verify", "--short", "--end-of-options", f"{ref}^{{commit}}",
        )
        return result.text

    async def show_file(self, commit: str, path: str) -> str:
        """Return the file verbatim. Raises UnicodeDecodeError if it is not UTF-8."""
        result = await self._check_git("show", "--end-of-options", f"{commit}:{path}")
        return result.stdout.decode("utf-8")
