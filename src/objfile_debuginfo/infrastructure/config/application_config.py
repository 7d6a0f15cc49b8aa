"""Application configuration for the command-line tool."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .settings import get_settings


@dataclass
class Config:
    """Configuration for the object file inspector."""

    object_file_path: Optional[Path] = None
    verbose: bool = False
    log_dir: Optional[Path] = None
    strict_debug_stream: bool = False

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from environment variables or a .env file.

        Args:
            env_path: Optional path to .env file (defaults to .env in current directory)

        Returns:
            Config object
        """
        if env_path is None:
            env_path = Path.cwd() / ".env"

        if env_path.exists():
            load_dotenv(env_path)

        object_file_str = os.getenv("OBJECT_FILE_PATH")
        log_dir_str = os.getenv("LOG_DIR")
        verbose = os.getenv("VERBOSE", "false").lower() in ("true", "1", "yes")

        return cls(
            object_file_path=Path(object_file_str) if object_file_str else None,
            verbose=verbose,
            log_dir=Path(log_dir_str) if log_dir_str else None,
            strict_debug_stream=get_settings()["STRICT_DEBUG_STREAM"],
        )

    @classmethod
    def from_args(
        cls,
        object_file_path: Optional[Path] = None,
        verbose: Optional[bool] = None,
        log_dir: Optional[Path] = None,
        strict_debug_stream: Optional[bool] = None,
    ) -> "Config":
        """
        Create configuration from explicit arguments, falling back to environment.

        Returns:
            Config object
        """
        config = cls.from_env()

        if object_file_path is not None:
            config.object_file_path = object_file_path
        if verbose is not None:
            config.verbose = verbose
        if log_dir is not None:
            config.log_dir = log_dir
        if strict_debug_stream is not None:
            config.strict_debug_stream = strict_debug_stream

        return config

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        if self.object_file_path is None:
            raise ValueError("No object file given (argument or OBJECT_FILE_PATH)")

        if not self.object_file_path.exists():
            raise ValueError(f"Object file not found: {self.object_file_path}")

        if not self.object_file_path.is_file():
            raise ValueError(f"Not a file: {self.object_file_path}")
