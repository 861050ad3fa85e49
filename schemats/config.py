"""Configuration management for schemats."""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

from pydantic import Field
from pydantic_settings import BaseSettings

from .naming import to_camel_case, to_pascal_case

# password=secret or password = 'it\'s secret' in a libpq keyword DSN
_KEYWORD_PASSWORD = re.compile(r"(\bpassword\s*=\s*)('(?:[^'\\]|\\.)*'|\S+)")
_QUERY_PASSWORD = re.compile(r"(\bpassword=)[^&#]*")


def _find_env_file() -> Optional[str]:
    """Find .env file in multiple locations.

    Search order:
    1. Current working directory
    2. ~/.schemats/.env
    """
    if os.path.exists(".env"):
        return ".env"

    user_env = Path.home() / ".schemats" / ".env"
    if user_env.exists():
        return str(user_env)

    return None


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_url: Optional[str] = Field(
        default=None,
        description="Connection string used when none is given on the command line"
    )
    schemats_default_schema: Optional[str] = Field(
        default=None,
        description="Schema to introspect when --schema is not given (default: the dialect default)"
    )
    schemats_log_level: str = Field(
        default="WARNING",
        description="Log level for diagnostics written to stderr"
    )

    class Config:
        env_file = _find_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()


@dataclass(frozen=True)
class Config:
    """Options for one generation run.

    Immutable once built: the same Config is shared by the type mapper,
    the schema assembler and the TypeScript generator. An empty schema
    means the dialect default (public for Postgres, the connected
    database for MySQL).
    """
    schema: str = ""
    tables: Tuple[str, ...] = ()
    camel_case: bool = False
    camel_case_types: bool = False
    enums: bool = False
    write_header: bool = True
    types_file: Optional[str] = None
    throw_on_missing_type: bool = True

    def __post_init__(self):
        # Accept any iterable of table names, store a tuple.
        object.__setattr__(self, "tables", tuple(self.tables or ()))

    def transform_type_name(self, type_name: str) -> str:
        """Name used for generated interfaces and enums."""
        if self.camel_case or self.camel_case_types:
            return to_pascal_case(type_name)
        return type_name

    def transform_column_name(self, column_name: str) -> str:
        """Name used for generated interface properties."""
        if self.camel_case:
            return to_camel_case(column_name)
        return column_name

    def get_cli_command(self, dialect: str, connection: Optional[str] = None) -> str:
        """Build the command line that regenerates the same output."""
        commands = ["schemats", "generate", dialect]
        if connection:
            commands.append(redact_connection_string(connection))
        if self.camel_case:
            commands.append("-c")
        elif self.camel_case_types:
            commands.append("--camel-case-types")
        if self.enums:
            commands.append("-e")
        for table in self.tables:
            commands.extend(["-t", table])
        if self.schema:
            commands.extend(["-s", self.schema])
        if self.types_file:
            commands.extend(["--types-file", self.types_file])
        if not self.throw_on_missing_type:
            commands.append("--no-throw-on-missing-type")
        return " ".join(commands)


def redact_connection_string(connection: str) -> str:
    """Hide the password of a URL or libpq keyword connection string."""
    if "://" not in connection:
        return _KEYWORD_PASSWORD.sub(r"\1***", connection)
    parts = urlsplit(connection)
    parts = parts._replace(query=_QUERY_PASSWORD.sub(r"\1***", parts.query))
    if parts.password:
        userinfo, _, hostinfo = parts.netloc.rpartition("@")
        user = userinfo.split(":", 1)[0]
        parts = parts._replace(netloc=f"{user}:***@{hostinfo}")
    return urlunsplit(parts)
