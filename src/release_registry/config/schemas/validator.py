"""JSON Schema validation for package definitions."""

from pathlib import Path
from typing import Any

import orjson
from jsonschema import Draft7Validator, ValidationError
from jsonschema.exceptions import best_match

from release_registry.logger import get_logger

logger = get_logger(__name__)

SCHEMA_DIR = Path(__file__).parent
PACKAGE_V1_SCHEMA_PATH = SCHEMA_DIR / "package_v1.schema.json"


class SchemaValidationError(Exception):
    """Raised when JSON schema validation fails."""

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize schema validation error.

        Args:
            message: Error message
            path: JSON path where error occurred

        """
        self.path = path
        super().__init__(message)


class PackageValidator:
    """Validates package definitions against the JSON schema."""

    def __init__(self) -> None:
        """Initialize validator with the loaded schema."""
        self._validator = Draft7Validator(
            self._load_schema(PACKAGE_V1_SCHEMA_PATH)
        )

    @staticmethod
    def _load_schema(schema_path: Path) -> dict[str, Any]:
        """Load JSON schema from file.

        Raises:
            FileNotFoundError: If schema file doesn't exist
            ValueError: If schema JSON is invalid

        """
        if not schema_path.exists():
            msg = f"Schema file not found: {schema_path}"
            raise FileNotFoundError(msg)

        try:
            with schema_path.open("rb") as f:
                return orjson.loads(f.read())  # type: ignore[no-any-return]
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON in schema file {schema_path}: {e}"
            raise ValueError(msg) from e

    @staticmethod
    def _format_validation_error(error: ValidationError) -> str:
        """Format validation error into user-friendly message."""
        path = (
            ".".join(str(p) for p in error.absolute_path)
            if error.absolute_path
            else "root"
        )

        message = error.message
        if error.validator == "required":
            missing = (
                error.message.split("'")[1]
                if "'" in error.message
                else "unknown"
            )
            message = f"Missing required field: '{missing}'"
        elif error.validator == "type":
            expected_type = error.validator_value
            actual = type(error.instance).__name__
            message = f"Expected type '{expected_type}', got '{actual}'"
        elif error.validator == "additionalProperties":
            message = f"Unknown field. {error.message}"

        return f"{message} (at '{path}')"

    def validate(self, definition: dict[str, Any]) -> None:
        """Validate a package definition.

        Raises:
            SchemaValidationError: If validation fails

        """
        errors = list(self._validator.iter_errors(definition))
        if errors:
            best_error = best_match(errors)
            path = (
                ".".join(str(p) for p in best_error.absolute_path)
                if best_error.absolute_path
                else None
            )
            raise SchemaValidationError(
                self._format_validation_error(best_error), path=path
            )

        logger.debug(
            "Package definition validation passed: %s",
            definition.get("package_name", "unknown"),
        )


_validator: PackageValidator | None = None


def get_validator() -> PackageValidator:
    """Get or create the shared validator instance."""
    global _validator
    if _validator is None:
        _validator = PackageValidator()
    return _validator


def validate_package_definition(definition: dict[str, Any]) -> None:
    """Validate a package definition (convenience function).

    Raises:
        SchemaValidationError: If validation fails

    """
    get_validator().validate(definition)
