"""Activation sinks: launching apps, settings panels and files."""

import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from launch_search.exceptions import ActivationError
from launch_search.utils.logging import get_logger

logger = get_logger(__name__)

SETTINGS_COMMAND = "gnome-control-center"
APP_LAUNCH_COMMAND = "gtk-launch"
OPEN_COMMAND = "xdg-open"


class ActivationSink(ABC):
    """Abstract base class for fire-and-forget activation targets."""

    @abstractmethod
    def activate_app(self, app_id: str) -> None:
        """Launch or focus an application.

        Raises:
            ActivationError: If the launch could not be started.
        """
        pass

    @abstractmethod
    def open_settings_panel(self, panel: str) -> None:
        """Open the system settings on a panel.

        Raises:
            ActivationError: If the settings application could not be started.
        """
        pass

    @abstractmethod
    def open_file(self, path: Path) -> None:
        """Open a file with its default application.

        Raises:
            ActivationError: If the opener could not be started.
        """
        pass


class SubprocessActivationSink(ActivationSink):
    """Activation through desktop command-line tools.

    Commands are started detached and never waited for.
    """

    def _spawn(self, args: list[str]) -> None:
        logger.debug("Spawning: %s", " ".join(args))
        try:
            subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            raise ActivationError(f"Failed to run {args[0]}: {e}") from e

    def activate_app(self, app_id: str) -> None:
        self._spawn([APP_LAUNCH_COMMAND, app_id.removesuffix(".desktop")])

    def open_settings_panel(self, panel: str) -> None:
        self._spawn([SETTINGS_COMMAND, panel])

    def open_file(self, path: Path) -> None:
        self._spawn([OPEN_COMMAND, str(path)])
