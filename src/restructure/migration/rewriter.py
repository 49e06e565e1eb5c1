"""Namespace and using-directive rewriting in relocated sources."""
import codecs
import os
import re
import tempfile
from pathlib import Path
from typing import List

from loguru import logger

from restructure.migration.context import MigrationContext
from restructure.migration.status import print_result
from restructure.models.results import StageResult

STAGE = "rewrite"


def rewrite_text(text: str, old_name: str, new_name: str) -> str:
    """Replace the root identifier after `namespace` and `using` tokens.

    A match already followed by new_name is left alone, so rewriting
    twice is a no-op even when new_name extends old_name.
    """
    pattern = re.compile(
        r"(?<![\w.])(namespace|using)(\s+)(" + re.escape(old_name) + r")(?!\w)"
    )

    def replace(match: "re.Match[str]") -> str:
        if text.startswith(new_name, match.start(3)) and new_name != old_name:
            return match.group(0)
        return f"{match.group(1)}{match.group(2)}{new_name}"

    return pattern.sub(replace, text)


def atomic_write(path: Path, data: bytes) -> None:
    """Write data to path via a temporary sibling file and an atomic rename."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_name, path.stat().st_mode & 0o7777)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class NamespaceRewriter:
    """Rewrites namespace roots in every source file under a directory."""

    def __init__(self, context: MigrationContext):
        self.context = context
        self.extensions = tuple(context.config.rewrite.extensions)
        self.changed_files: List[Path] = []

    def rewrite_namespaces(self, target_dir: Path, old_name: str, new_name: str) -> List[StageResult]:
        """Rewrite old_name to new_name in all matching files under target_dir.

        Returns:
            One warning per file that could not be processed, followed by a
            summary result with the number of changed files
        """
        console = self.context.console
        self.changed_files = []
        results: List[StageResult] = []

        if not target_dir.is_dir():
            return [print_result(console, StageResult.warning(STAGE, f"Nothing to rewrite, {target_dir} missing"))]

        for path in sorted(target_dir.rglob("*")):
            if not path.is_file() or path.suffix not in self.extensions:
                continue
            try:
                if self.rewrite_file(path, old_name, new_name):
                    self.changed_files.append(path)
                    logger.info(f"Rewrote namespaces in {path}")
            except (OSError, UnicodeDecodeError) as e:
                results.append(print_result(console, StageResult.warning(STAGE, f"Could not rewrite {path}: {e}")))

        results.append(print_result(console, StageResult.success(
            STAGE, f"Rewrote {old_name} -> {new_name} in {len(self.changed_files)} file(s)"
        )))
        return results

    def rewrite_file(self, path: Path, old_name: str, new_name: str) -> bool:
        """Rewrite one file in place, preserving BOM and line endings.

        Returns:
            True if the file content changed
        """
        raw = path.read_bytes()
        bom = codecs.BOM_UTF8 if raw.startswith(codecs.BOM_UTF8) else b""
        text = raw[len(bom):].decode("utf-8")

        updated = rewrite_text(text, old_name, new_name)
        if updated == text:
            return False

        atomic_write(path, bom + updated.encode("utf-8"))
        return True
