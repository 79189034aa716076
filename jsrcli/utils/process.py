"""Child process helpers."""

import logging
import shutil
import subprocess
from typing import Dict, List, Optional

from jsrcli.utils.exceptions import ExecError

logger = logging.getLogger(__name__)


def exec_command(
    cmd: str,
    args: List[str],
    cwd: str,
    env: Optional[Dict[str, str]] = None,
    capture_output: bool = False,
) -> str:
    """Run ``cmd`` with ``args`` and wait for it to exit.

    The command is spawned directly, without a shell. Unless
    ``capture_output`` is set, the child inherits stdin/stdout/stderr so its
    output streams straight to the user.

    Args:
        cmd: Executable name or path; names are resolved through ``PATH``
        args: Arguments passed verbatim
        cwd: Working directory of the child
        env: Full environment for the child, defaults to ours
        capture_output: Collect stdout and stderr instead of inheriting them

    Returns:
        Combined stdout and stderr when capturing, otherwise an empty string

    Raises:
        ExecError: If the child exits with a non-zero code; code 1 when it
            was killed by a signal
    """
    # shutil.which also resolves npm.cmd & co. on Windows
    executable = shutil.which(cmd) or cmd
    logger.debug(f"Spawning {executable} {args} in {cwd}")

    if capture_output:
        completed = subprocess.run(
            [executable, *args],
            cwd=cwd,
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    else:
        completed = subprocess.run([executable, *args], cwd=cwd, env=env)

    if completed.returncode < 0:
        # killed by a signal, there is no exit code to pass on
        logger.debug(f"{cmd} terminated by signal {-completed.returncode}")
        raise ExecError(1, command=cmd)
    if completed.returncode != 0:
        raise ExecError(completed.returncode, command=cmd)
    if capture_output:
        return completed.stdout or ""
    return ""
