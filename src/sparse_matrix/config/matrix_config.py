from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from sparse_matrix.config.yaml_io import read_yaml
from sparse_matrix.utils.indices_utils import validate_ndim
from sparse_matrix.utils.logging_utils import setup_logger

PACKAGE_LOGGER = "sparse_matrix"

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class MatrixConfig:
    """
    Construction and logging options for a `SparseMatrix`.

    Attributes
    ----------
    ndim : int
        Number of matrix dimensions (>= 1). Defaults to 2.
    default : Any
        Value of every unwritten cell. Defaults to 0.
    log_level : str
        Name of the level for the package logger (e.g. "DEBUG"). Defaults to "WARNING".
    log_file : Optional[str]
        If set, package logs are also written to this file.
    """
    ndim: int = 2
    default: Any = 0
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        validate_ndim(self.ndim)
        if not isinstance(self.log_level, str) or self.log_level.upper() not in _LEVEL_NAMES:
            raise ValueError(f"log_level must be one of {_LEVEL_NAMES}, got {self.log_level!r}")

    @property
    def level(self) -> int:
        """The numeric logging level for `log_level`."""
        return getattr(logging, self.log_level.upper())


class MatrixConfigLoader:
    """
    Builds a `MatrixConfig` from a YAML file.

    The file may contain two sections, both optional::

        matrix:
          ndim: 3
          default: -1
        logging:
          level: DEBUG
          file: var/log/sparse_matrix.log

    Keys that are absent keep the `MatrixConfig` defaults.
    """
    def load(self, yaml_path: str | Path | None = None) -> MatrixConfig:
        """
        Reads `yaml_path` and returns the parsed configuration.

        Raises
        ------
        ValueError
            If `yaml_path` is missing, is not a YAML file, or holds invalid values.
        """
        if yaml_path is None:
            raise ValueError("yaml_path is required.")

        data = read_yaml(yaml_path)
        return self.from_mapping(data)

    @staticmethod
    def from_mapping(data: Dict[str, Any]) -> MatrixConfig:
        """Builds a `MatrixConfig` from already-parsed YAML data."""
        matrix_block = MatrixConfigLoader._section(data, "matrix")
        logging_block = MatrixConfigLoader._section(data, "logging")

        kwargs: Dict[str, Any] = {}
        if "ndim" in matrix_block:
            kwargs["ndim"] = matrix_block["ndim"]
        if "default" in matrix_block:
            kwargs["default"] = matrix_block["default"]
        if "level" in logging_block:
            kwargs["log_level"] = logging_block["level"]
        if logging_block.get("file"):
            kwargs["log_file"] = str(logging_block["file"])

        return MatrixConfig(**kwargs)

    @staticmethod
    def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        block = data.get(name) or {}
        if not isinstance(block, dict):
            raise ValueError(f"'{name}' section must be a mapping, got {type(block).__name__}.")
        return block


def configure_logging(config: MatrixConfig) -> logging.Logger:
    """
    Sets up the package logger according to `config`.

    Console output always goes to stdout; a file handler is added only when
    `config.log_file` is set.

    Returns
    -------
    logging.Logger
        The configured `sparse_matrix` logger.
    """
    return setup_logger(
        name=PACKAGE_LOGGER,
        level=config.level,
        log_file=config.log_file,
    )
