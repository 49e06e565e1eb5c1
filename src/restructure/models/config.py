"""Configuration models for restructure."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class LayoutConfig(BaseModel):
    """Repository layout configuration."""

    legacy_project: str = Field(default="AccountingSystem", description="Legacy project name")
    legacy_dir: Optional[str] = Field(
        default=None, description="Legacy project directory (defaults to the project name)"
    )
    target_dir: str = Field(default="src", description="Directory holding the new projects")
    project_prefix: str = Field(default="Accounting", description="Prefix of the new projects")
    manifest: Optional[str] = Field(
        default=None, description="Solution file name (defaults to the single *.sln at the root)"
    )
    backup_name_format: str = Field(
        default="{legacy}_backup_{timestamp}", description="Backup directory name template"
    )
    timestamp_format: str = Field(default="%Y%m%d_%H%M%S", description="Backup timestamp format")

    @field_validator("backup_name_format")
    @classmethod
    def validate_backup_name_format(cls, v: str) -> str:
        """Backup names must be unique per run."""
        if "{timestamp}" not in v:
            raise ValueError("backup_name_format must contain {timestamp}")
        return v


class ToolsConfig(BaseModel):
    """External tools configuration."""

    build_binary: str = Field(default="dotnet", description="Build toolchain executable")
    vcs_binary: str = Field(default="git", description="Version control executable")
    command_timeout: Optional[int] = Field(
        default=None, ge=1, description="Timeout for external commands in seconds"
    )


class PromptsConfig(BaseModel):
    """Confirmation gate configuration."""

    assume_yes: bool = Field(default=False, description="Answer yes to every confirmation")
    default_answer: bool = Field(default=False, description="Default answer of yes/no prompts")


class RewriteConfig(BaseModel):
    """Namespace rewrite configuration."""

    extensions: list[str] = Field(default=[".cs"], description="Text file suffixes to rewrite")

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        """Normalize suffixes to start with a dot."""
        if not v:
            raise ValueError("extensions must not be empty")
        return [ext if ext.startswith(".") else f".{ext}" for ext in v]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    file: str = Field(default="restructure.log", description="Log file name")
    rotation: str = Field(default="10 MB", description="Log rotation size")
    retention: int = Field(default=5, ge=0, description="Number of rotated files to keep")


class RestructureConfig(BaseModel):
    """Main restructure configuration."""

    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    prompts: PromptsConfig = Field(default_factory=PromptsConfig)
    rewrite: RewriteConfig = Field(default_factory=RewriteConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"validate_assignment": True}
