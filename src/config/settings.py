"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MD2ROFF_ prefix (e.g., MD2ROFF_DEFAULT_DIALECT=mdoc).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.dialect import Dialect


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MD2ROFF_ prefix.

    Examples:
        MD2ROFF_DEFAULT_DIALECT=mom
        MD2ROFF_MAN_SECTION=1
        MD2ROFF_MOM_PAPER=LETTER
    """

    model_config = SettingsConfigDict(
        env_prefix="MD2ROFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Dialect selection
    default_dialect: Dialect = Field(
        default=Dialect.MAN,
        description="Macro package used when no dialect flag is given",
    )

    # Page header configuration
    man_section: str = Field(
        default="7",
        description="Manual section written into synthesized .TH/.Dt headers",
    )

    man_extra: str = Field(
        default="document",
        description="Trailing argument of a synthesized .TH header",
    )

    mom_author: str = Field(
        default="md2roff",
        description="Author written into the mom .AUTHOR header",
    )

    mom_paper: str = Field(
        default="A4",
        description="Paper size for the mom .PAPER header",
    )

    mom_printstyle: str = Field(
        default="TYPESET",
        description="mom .PRINTSTYLE (TYPESET or TYPEWRITE)",
    )

    # Layout configuration
    indent: int = Field(
        default=4,
        ge=0,
        description="Indent width for man/mm code blocks and list items",
    )

    max_list_depth: int = Field(
        default=32,
        ge=1,
        description="Maximum number of simultaneously open lists",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
