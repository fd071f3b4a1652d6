"""Runners that issue systemctl commands."""

import logging
import subprocess
from typing import Dict, List, Optional, Tuple

from ..exceptions import ControlCommandError
from ..utils.constants import DEFAULT_SYSTEMCTL

logger = logging.getLogger(__name__)


class CommandRunner:
    """Issues commands to the service manager.

    Subclasses run one control command per call and raise
    ControlCommandError when it fails. Output is never interpreted, only
    the exit status counts.
    """

    def run(self, *args: str):
        raise NotImplementedError


class SystemctlRunner(CommandRunner):
    """Runs systemctl as a child process and waits for it."""

    def __init__(
        self,
        executable: str = DEFAULT_SYSTEMCTL,
        user_mode: bool = False,
        use_pkexec: bool = False,
        timeout: Optional[float] = None,
    ):
        """Initialize the runner.

        Args:
            executable: systemctl binary to run
            user_mode: Pass --user to manage the user's service manager
            use_pkexec: Prefix commands with pkexec for privilege escalation
            timeout: Seconds to wait for a command, None waits forever
        """
        self.executable = executable
        self.user_mode = user_mode
        self.use_pkexec = use_pkexec
        self.timeout = timeout

    def build_command(self, *args: str) -> List[str]:
        cmd = []
        if self.use_pkexec:
            cmd.append("pkexec")

        cmd.append(self.executable)

        if self.user_mode:
            cmd.append("--user")

        cmd.extend(args)
        return cmd

    def run(self, *args: str):
        """Run a systemctl subcommand.

        Args:
            *args: Subcommand and its arguments, e.g. ("enable", "foo")

        Raises:
            ControlCommandError: If the command fails, times out or cannot be started
        """
        cmd = self.build_command(*args)
        logger.debug(f"Running {' '.join(cmd)}")

        try:
            subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True
            )

        except subprocess.CalledProcessError as e:
            stderr = e.stderr.strip() if e.stderr else ""
            logger.error(f"'{' '.join(args)}' failed with status {e.returncode}: {stderr}")
            raise ControlCommandError(args, e.returncode, stderr) from e

        except subprocess.TimeoutExpired as e:
            logger.error(f"Timeout while running '{' '.join(args)}'")
            raise ControlCommandError(args, stderr=f"timed out after {self.timeout}s") from e

        except OSError as e:
            logger.error(f"Could not launch {self.executable}: {e}")
            raise ControlCommandError(args, stderr=str(e)) from e


class RecordingRunner(CommandRunner):
    """Records commands instead of running them.

    Failures can be scripted per subcommand, e.g. fail("daemon-reload") makes
    every later daemon-reload raise with the given status.
    """

    def __init__(self):
        self.calls: List[Tuple[str, ...]] = []
        self._failures: Dict[str, int] = {}

    def fail(self, subcommand: str, returncode: int = 1):
        self._failures[subcommand] = returncode

    def run(self, *args: str):
        self.calls.append(tuple(args))

        returncode = self._failures.get(args[0]) if args else None
        if returncode is not None:
            raise ControlCommandError(args, returncode)
