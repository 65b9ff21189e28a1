"""Configuration file loader with comprehensive error handling.

This module loads and parses JSON catalog and rack files. It handles file
system errors, JSON parsing errors, and Pydantic validation errors with
clear, actionable error messages.
"""

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from rackbuilder.application.config.schema import (
    CatalogConfiguration,
    RackConfiguration,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigError(Exception):
    """Exception raised for configuration-related errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, json_parse, validation,
            permission_denied, file_read_error)
        path: Path to the configuration file (if applicable)
        details: Additional error details (line/column for JSON, validation errors, etc.)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("cards", 0, "slot_span"))
        'cards[0].slot_span'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    lines = ["Configuration validation failed:"]
    for detail in details:
        path = detail["path"] or "<root>"
        message = detail["message"]
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {path}: {message} (got: {value!r})")
        else:
            lines.append(f"  - {path}: {message}")
    return "\n".join(lines)


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in config file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate(model: type[ModelT], data: Any, path: Path | None = None) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            path=path,
            details=details,
        )


def load_catalog(path: Path) -> CatalogConfiguration:
    """Load and validate a catalog from a JSON file.

    Args:
        path: Path to the JSON catalog file

    Returns:
        A validated CatalogConfiguration instance

    Raises:
        ConfigError: If the file cannot be loaded or validated.
            The error_type attribute indicates the specific error category:
            - "file_not_found": File does not exist
            - "json_parse": Invalid JSON syntax
            - "validation": Schema validation failed
    """
    return _validate(CatalogConfiguration, _read_json(path), path)


def load_catalog_from_dict(data: dict[str, Any]) -> CatalogConfiguration:
    """Load and validate a catalog from a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(CatalogConfiguration, data)


def load_rack_config(path: Path) -> RackConfiguration:
    """Load and validate a rack file.

    Raises:
        ConfigError: If the file cannot be loaded or validated.
    """
    return _validate(RackConfiguration, _read_json(path), path)


def load_rack_config_from_dict(data: dict[str, Any]) -> RackConfiguration:
    """Load and validate a rack configuration from a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(RackConfiguration, data)
