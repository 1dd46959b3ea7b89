"""SingleFile script payloads injected into conversation pages."""

import logging
import subprocess
from pathlib import Path

import orjson
from pydantic import BaseModel, ValidationError

from conversation_archive.config import Settings
from conversation_archive.domain.errors import ScriptBundleError

logger = logging.getLogger(__name__)

GLOBAL_EXPORT = "; window.singlefile = singlefile"

HOOK_SCRIPT_FILE = "hook.js"
SCRIPT_FILE = "single-file.js"
ZIP_SCRIPT_FILE = "zip.js"

# Prints the three sources exported by single-file-cli as one JSON object
NODE_EXPORT_SOURCE = """
const m = await import("single-file-cli/lib/single-file-script.js")
process.stdout.write(JSON.stringify({
  hook_script: m.getHookScriptSource(),
  script: await m.getScriptSource({}),
  zip_script: m.getZipScriptSource(),
}))
"""


class ScriptBundle(BaseModel):
    """Scripts required to serialize a page with SingleFile.

    ``hook_script`` must run before any page script, ``page_script`` exposes
    the ``singlefile`` global, and ``zip_script`` is handed to ``getPageData``.
    """

    hook_script: str
    script: str
    zip_script: str

    @property
    def page_script(self) -> str:
        """SingleFile source followed by the global export the serializer is called through."""
        return self.script + GLOBAL_EXPORT

    @classmethod
    def from_directory(cls, directory: Path) -> "ScriptBundle":
        """Load the bundle from ``hook.js``, ``single-file.js`` and ``zip.js``."""
        try:
            return cls(
                hook_script=(directory / HOOK_SCRIPT_FILE).read_text(encoding="utf-8"),
                script=(directory / SCRIPT_FILE).read_text(encoding="utf-8"),
                zip_script=(directory / ZIP_SCRIPT_FILE).read_text(encoding="utf-8"),
            )
        except OSError as e:
            raise ScriptBundleError(f"Failed to read SingleFile scripts from {directory}: {e}") from e

    @classmethod
    def from_node(cls, node_binary: str = "node", cwd: Path | None = None) -> "ScriptBundle":
        """Export the bundle from an installed ``single-file-cli`` package.

        Args:
            node_binary: Node.js executable
            cwd: Directory whose node_modules contains single-file-cli
        """
        try:
            completed = subprocess.run(
                [node_binary, "--input-type=module", "-e", NODE_EXPORT_SOURCE],
                cwd=cwd,
                capture_output=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise ScriptBundleError(f"Node.js executable not found: {node_binary}") from e
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode("utf-8", errors="replace").strip()
            raise ScriptBundleError(f"Failed to export SingleFile scripts: {stderr}") from e

        try:
            return cls.model_validate(orjson.loads(completed.stdout))
        except (orjson.JSONDecodeError, ValidationError) as e:
            raise ScriptBundleError(f"Malformed SingleFile script export: {e}") from e


def load_script_bundle(config: Settings) -> ScriptBundle:
    """Load the SingleFile scripts according to configuration."""
    if config.scripts_dir is not None:
        logger.debug(f"Loading SingleFile scripts from {config.scripts_dir}")
        return ScriptBundle.from_directory(config.scripts_dir)

    logger.debug(f"Exporting SingleFile scripts with {config.node_binary} in {config.workspace_root}")
    return ScriptBundle.from_node(config.node_binary, config.workspace_root)
