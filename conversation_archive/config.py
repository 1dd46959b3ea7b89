"""Archive configuration with environment variable support."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MATERIAL_SYMBOLS_URL = (
    "https://fonts.gstatic.com/s/i/short-term/release/materialsymbolsoutlined/"
    "{name}/default/{size}.svg"
)


class Settings(BaseSettings):
    """Archive configuration loaded from environment variables.

    Loads from environment (CONVERSATION_ARCHIVE_*), .env file, or defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONVERSATION_ARCHIVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Workspace layout
    workspace_root: Path = Path(".")
    archive_dir: Path = Path("conversations")
    source_glob: str = "**/*.md"
    report_file: Path = Path(".git/commit-msg")

    # Remote documents
    share_url_template: str = "https://gemini.google.com/share/{id}"
    icon_url_template: str = MATERIAL_SYMBOLS_URL

    # Capture behaviour
    max_capture_concurrency: int = Field(default=10, ge=1)
    ready_selector: str = "message-content"
    ready_timeout: float = 20.0  # seconds
    settle_delay: float = 3.0  # seconds, heuristic wait for late async content
    click_timeout: float = 5.0  # seconds
    title_selector: str = "h1 > strong"
    math_marker_class: str = "katex"
    math_font_prefix: str = "KaTeX"
    expand_labels: list[str] = Field(default_factory=lambda: ["Show", "More"])
    max_title_bytes: int = Field(default=100, ge=1)

    # Serialization scripts and browser
    scripts_dir: Path | None = None
    node_binary: str = "node"
    headless: bool = True
    browser_args: list[str] = Field(default_factory=lambda: ["--disable-web-security"])

    @field_validator("scripts_dir", mode="before")
    @classmethod
    def parse_null_scripts_dir(cls, v: str | Path | None) -> str | Path | None:
        """Convert 'null' string to None."""
        if isinstance(v, str) and v.lower() in ("null", "none", ""):
            return None
        return v

    @field_validator("workspace_root", "archive_dir", "report_file", mode="after")
    @classmethod
    def resolve_path(cls, v: Path) -> Path:
        """Resolve relative paths against the working directory."""
        return v.resolve()
