"""
Module registry reader.

Reads the module list from app/etc/config.php and reports which modules
are active, in the order Magento loads them.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from .filesystem import FileSystem, LocalFileSystem
from .locator import CONFIG_PATH

MODULE_ACTIVE = 1

_MODULES_KEY_RE = re.compile(r"""(['"])modules\1\s*=>\s*(\[|array\s*\()""", re.IGNORECASE)
_ENTRY_RE = re.compile(r"""(['"])([^'"]+)\1\s*=>\s*([^,\s\]\)]+)""")
_INT_RE = re.compile(r"^[+-]?(?:0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+|0[0-7_]*|[1-9][0-9_]*)$")

_CLOSERS = {"[": "]", "(": ")"}


@dataclass
class ModuleEntry:
    """A module declared in the registry."""
    name: str
    enabled: bool


class ModuleRegistry:
    """Read module activation state from app/etc/config.php."""

    def __init__(self, project_root: str | Path, fs: FileSystem | None = None):
        """Initialize the registry reader.

        Args:
            project_root: Magento project root.
            fs: Filesystem to read from. Defaults to the local disk.
        """
        self.project_root = Path(project_root)
        self.fs = fs or LocalFileSystem()
        self.config_path = self.project_root / CONFIG_PATH

    def load(self) -> list[ModuleEntry]:
        """Load every declared module in declaration order.

        Returns:
            List of module entries. Empty if config.php declares no modules.

        Raises:
            OSError: If config.php cannot be read.
            ValueError: If the modules array is not terminated.
        """
        content = self.fs.read_text(self.config_path)
        return parse_modules(content)

    def enabled_modules(self) -> list[str]:
        """Get the names of active modules in load order."""
        return [entry.name for entry in self.load() if entry.enabled]


def parse_modules(content: str) -> list[ModuleEntry]:
    """Parse the 'modules' array out of config.php source.

    Args:
        content: PHP source of config.php.

    Returns:
        Module entries in declaration order.
    """
    content = strip_comments(content)

    match = _MODULES_KEY_RE.search(content)
    if not match:
        return []

    opener = match.group(2)[-1]
    body = _extract_array_body(content, match.end(), opener)

    entries = []
    for entry_match in _ENTRY_RE.finditer(body):
        name = entry_match.group(2)
        flag = _parse_flag(entry_match.group(3))
        entries.append(ModuleEntry(name=name, enabled=is_active(flag)))

    return entries


def is_active(flag: int | bool | str) -> bool:
    """Check a module flag against the active sentinel.

    Only the integer 1 counts; true, '1' and other integers do not.
    """
    return isinstance(flag, int) and not isinstance(flag, bool) and flag == MODULE_ACTIVE


def _parse_flag(token: str) -> int | bool | str:
    lowered = token.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if _INT_RE.match(token):
        try:
            return _parse_int(token)
        except ValueError:
            return token
    return token.strip("'\"")


def _parse_int(token: str) -> int:
    """Parse a PHP integer literal (decimal, 0x, 0b, 0o or leading-zero octal)."""
    sign = -1 if token.startswith("-") else 1
    digits = token.lstrip("+-").replace("_", "").lower()

    if digits.startswith("0x"):
        value = int(digits[2:], 16)
    elif digits.startswith("0b"):
        value = int(digits[2:], 2)
    elif digits.startswith("0o"):
        value = int(digits[2:], 8)
    elif len(digits) > 1 and digits.startswith("0"):
        value = int(digits[1:], 8)
    else:
        value = int(digits)

    return sign * value


def strip_comments(content: str) -> str:
    """Remove //, # and /* */ comments that sit outside string literals.

    Args:
        content: PHP source.

    Returns:
        Source with comments removed and line breaks kept.
    """
    result = []
    quote = None
    i = 0

    while i < len(content):
        char = content[i]

        if quote:
            result.append(char)
            if char == "\\" and i + 1 < len(content):
                result.append(content[i + 1])
                i += 2
                continue
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
            result.append(char)
        elif content.startswith("/*", i):
            end = content.find("*/", i + 2)
            i = len(content) if end == -1 else end + 2
            continue
        elif char == "#" or content.startswith("//", i):
            end = content.find("\n", i)
            i = len(content) if end == -1 else end
            continue
        else:
            result.append(char)

        i += 1

    return "".join(result)


def _extract_array_body(content: str, start: int, opener: str) -> str:
    """Return the text between an opening bracket and its matching closer.

    Args:
        content: PHP source.
        start: Index just after the opening bracket.
        opener: The opening bracket character, '[' or '('.

    Returns:
        The array body, without the brackets.
    """
    closer = _CLOSERS[opener]
    depth = 1
    quote = None
    i = start

    while i < len(content):
        char = content[i]

        if quote:
            if char == "\\":
                i += 2
                continue
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return content[start:i]

        i += 1

    raise ValueError("Unterminated 'modules' array in config.php")
