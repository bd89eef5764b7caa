"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use COLORGFUL_ prefix (e.g., COLORGFUL_NO_COLORS=true).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use COLORGFUL_ prefix.

    Examples:
        COLORGFUL_NO_COLORS=true
        COLORGFUL_THREAD_SAFE=false
        COLORGFUL_THEME=dark
    """

    model_config = SettingsConfigDict(
        env_prefix="COLORGFUL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Style compilation
    no_colors: bool = Field(
        default=False,
        description="Compile directives without emitting any escape sequences",
    )

    # Runtime restorer
    thread_safe: bool = Field(
        default=True,
        description="Guard per-formatter restore state with a lock (formatter shared across threads)",
    )

    # Diagnostics
    verbosity: int = Field(
        default=0,
        description="Internal diagnostic verbosity (0=silent, 1=warnings, 2=verbose, 3=debug)",
    )

    # Themes
    theme: str = Field(
        default="default",
        description="Name of the built-in palette used when none is given explicitly",
    )

    # Host formatting
    time_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="strftime() format used by ${time} when no format argument is given",
    )

    def level_matches(self, verbosity: int) -> bool:
        """
        Check whether diagnostics of given verbosity should be emitted.

        Args:
            verbosity: Minimum verbosity level required by a diagnostic

        Returns:
            True if configured verbosity is high enough

        Example:
            >>> settings = AppSettings(verbosity=2)
            >>> settings.level_matches(1)
            True
        """
        return self.verbosity >= verbosity


# Singleton instance - import this in your code
appsettings = AppSettings()
