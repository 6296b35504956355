"""Shell integration written into ~/.bashrc."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from legosigno.errors import StorageError

logger = logging.getLogger(__name__)

HEADER = "################### Legosigno Start ###################"
FOOTER = "###################  Legosigno End  ###################"

SHELL_BLOCK_TEMPLATE = """\
{header}
export PROMPT_COMMAND="{prompt_command}"
cdb() {{ if [ $# -eq 0 ]; then {command} bookmark; else OUTPUT="$({command} cd "$1")"; \
if [ $? -eq 0 ]; then cd "$OUTPUT"; else echo "legosigno failed. Could not cd to folder $1"; fi; fi }}
alias cdr='{command} remove'
alias cdl='{command} list'
{footer}
"""

_BLOCK_RE = re.compile(
    r"\n?" + re.escape(HEADER) + r".*?" + re.escape(FOOTER) + r"\n?",
    re.DOTALL,
)


class ShellInstaller:
    """Add or remove the Legosigno block in a shell rc file."""

    def __init__(self, rc_path: Path, command: str = "legosigno") -> None:
        self.rc_path = Path(rc_path)
        self.command = command

    @property
    def visit_command(self) -> str:
        return f"{self.command} visit"

    def render(self, prompt_command: str | None = None) -> str:
        """Shell block, chaining onto an existing PROMPT_COMMAND."""
        chained = self.visit_command
        if prompt_command:
            chained = f"{prompt_command.rstrip(';')};{chained}"
        return SHELL_BLOCK_TEMPLATE.format(
            header=HEADER,
            footer=FOOTER,
            prompt_command=chained,
            command=self.command,
        )

    def _read(self) -> str:
        if not self.rc_path.exists():
            return ""
        try:
            return self.rc_path.read_text()
        except OSError as e:
            raise StorageError(self.rc_path, e) from e

    def is_installed(self, prompt_command: str | None = None) -> bool:
        if prompt_command and self.visit_command in prompt_command:
            return True
        return HEADER in self._read()

    def install(self, prompt_command: str | None = None) -> bool:
        """Append the block. Returns False if it was already there."""
        if self.is_installed(prompt_command):
            logger.info("PROMPT_COMMAND already calls %s", self.command)
            return False
        try:
            with open(self.rc_path, "a") as f:
                f.write("\n" + self.render(prompt_command))
        except OSError as e:
            raise StorageError(self.rc_path, e) from e
        logger.info("Installed shell integration in %s", self.rc_path)
        return True

    def uninstall(self) -> bool:
        """Strip the block. Returns False if there was none."""
        text = self._read()
        stripped, count = _BLOCK_RE.subn("\n", text)
        if not count:
            return False
        try:
            self.rc_path.write_text(stripped.rstrip("\n") + "\n" if stripped.strip() else "")
        except OSError as e:
            raise StorageError(self.rc_path, e) from e
        logger.info("Removed shell integration from %s", self.rc_path)
        return True
