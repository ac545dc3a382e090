"""ImageMagick backend, supporting both the v7 `magick` and v6 `convert` commands."""

from __future__ import annotations

import enum
import logging
import shutil
import subprocess
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


class MagickFlavor(enum.Enum):
    V7 = "v7"
    V6 = "v6"
    NONE = "none"


def command_exists(cmd: str, path_env: str | None = None, windows: bool | None = None) -> bool:
    """True if an executable named cmd is on PATH (with .exe on Windows)."""
    if windows is None:
        windows = sys.platform.startswith("win")
    cmd_name = f"{cmd}.exe" if windows else cmd
    return shutil.which(cmd_name, path=path_env) is not None


def parse_dimensions(output: str) -> tuple[int, int] | None:
    """Parse identify's `%wx%h` output; only the first frame is considered."""
    text = output.strip()
    if not text:
        return None
    first = text.split()[0]
    parts = first.split("x")
    if len(parts) < 2 or not parts[0].isdigit() or not parts[1].isdigit():
        return None
    return int(parts[0]), int(parts[1])


class ImageMagick:
    """ImageMagick adapter.

    The installed flavour is detected lazily on first use and remembered for
    the lifetime of the instance. Create one instance per run and pass it to
    every caller.
    """

    name = "imagemagick"

    def __init__(self, path_env: str | None = None, windows: bool | None = None) -> None:
        self._path_env = path_env
        self._windows = windows
        self._flavor: MagickFlavor | None = None

    @property
    def flavor(self) -> MagickFlavor:
        if self._flavor is None:
            self._flavor = self._detect()
            logger.debug("ImageMagick flavour detected: %s", self._flavor.value)
        return self._flavor

    def _detect(self) -> MagickFlavor:
        if command_exists("magick", self._path_env, self._windows):
            return MagickFlavor.V7
        if command_exists("convert", self._path_env, self._windows):
            return MagickFlavor.V6
        return MagickFlavor.NONE

    def available(self) -> bool:
        return self.flavor is not MagickFlavor.NONE

    def convert_command(self) -> list[str]:
        if self.flavor is MagickFlavor.V7:
            return ["magick", "convert"]
        return ["convert"]

    def identify_command(self) -> list[str]:
        if self.flavor is MagickFlavor.V7:
            return ["magick", "identify"]
        return ["identify"]

    def _run(self, cmd: list[str]) -> subprocess.CompletedProcess[str] | None:
        try:
            return subprocess.run(cmd, capture_output=True, text=True, check=False)
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("Failed to run %s: %s", cmd[0], exc)
            return None

    def resize(
        self,
        source: str | Path,
        dest: str | Path,
        geometry: str,
        quality: int | None = None,
    ) -> bool:
        cmd = self.convert_command() + [str(source), "-resize", geometry]
        if quality is not None:
            cmd += ["-quality", str(quality)]
        cmd.append(str(dest))

        proc = self._run(cmd)
        if proc is None:
            return False
        if proc.returncode != 0:
            logger.debug(
                "convert exited with %d for %s: %s",
                proc.returncode,
                source,
                proc.stderr.strip(),
            )
            return False
        return True

    def probe_dimensions(self, source: str | Path) -> tuple[int, int] | None:
        # [0] selects the first frame of animated or multi-page images
        cmd = self.identify_command() + ["-format", "%wx%h", f"{source}[0]"]
        proc = self._run(cmd)
        if proc is None or proc.returncode != 0:
            return None
        return parse_dimensions(proc.stdout)
