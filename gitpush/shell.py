import logging
import subprocess

from typing import Optional, Sequence

from gitpush.errors import SubprocessFailure

logger = logging.getLogger("gitpush.shell")

CAPTURED = 'captured'
INHERITED = 'inherited'


def run(binary: str, args: Sequence[str], mode: str = CAPTURED, cwd: Optional[str] = None) -> str:
    """Run ``binary`` with ``args`` and return its stdout.

    In INHERITED mode the child talks to the terminal directly (``gh auth login``
    needs that) and the return value is always an empty string.
    Raises SubprocessFailure on a non-zero exit or when the binary cannot be started.
    """
    command = [binary, *args]
    logger.debug("Running %s (%s)", ' '.join(command), mode)
    try:
        if mode == INHERITED:
            result = subprocess.run(command, cwd=cwd)
        else:
            result = subprocess.run(
                command, capture_output=True, encoding='utf-8', errors='replace', cwd=cwd
            )
    except OSError as e:
        raise SubprocessFailure(command, None, str(e)) from e

    if result.returncode != 0:
        output = ''
        if mode != INHERITED:
            output = '\n'.join(part for part in (result.stderr, result.stdout) if part)
        logger.debug("%s exited with %s", binary, result.returncode)
        raise SubprocessFailure(command, result.returncode, output)

    return result.stdout if mode != INHERITED else ''


def succeeds(binary: str, args: Sequence[str], runner=run, cwd: Optional[str] = None) -> bool:
    try:
        runner(binary, args, cwd=cwd)
        return True
    except SubprocessFailure:
        return False
