"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use FORMATHUB_ prefix (e.g., FORMATHUB_CONTEXT_LINES=5).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use FORMATHUB_ prefix.

    Examples:
        FORMATHUB_INDENT_SIZE=4
        FORMATHUB_CONTEXT_LINES=5
        FORMATHUB_HIGHLIGHT_STYLE=monokai
    """

    model_config = SettingsConfigDict(
        env_prefix="FORMATHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # CSS configuration
    indent_size: int = Field(
        default=2,
        ge=0,
        description="Default number of spaces per indentation level when beautifying",
    )

    # Diff configuration
    context_lines: int = Field(
        default=3,
        ge=0,
        description="Default number of unchanged lines shown around each unified hunk",
    )

    diff_warn_cells: int = Field(
        default=4_000_000,
        ge=1,
        description="Warn when the LCS table (old lines x new lines) exceeds this many cells",
    )

    # Output configuration
    highlight_style: str = Field(
        default="default",
        description="Pygments style used for --html output",
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug output while processing",
    )

    def indentUnit_make(self, indent_type: str, indent_size: int) -> str:
        """
        Build the string used for one level of indentation.

        Args:
            indent_type: "spaces" or "tabs"
            indent_size: Number of spaces (ignored for tabs)

        Returns:
            Indentation unit

        Example:
            >>> settings = AppSettings()
            >>> settings.indentUnit_make("spaces", 4)
            '    '
            >>> settings.indentUnit_make("tabs", 4)
            '\\t'
        """
        if indent_type == "tabs":
            return "\t"
        return " " * indent_size


# Singleton instance - import this in your code
appsettings = AppSettings()
