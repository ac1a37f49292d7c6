"""JSON Schema validation for package definitions.

Usage:
    from release_registry.config.schemas import (
        SchemaValidationError,
        validate_package_definition,
    )

    try:
        validate_package_definition(definition)
    except SchemaValidationError as e:
        print(f"Validation failed: {e}")
"""

from release_registry.config.schemas.validator import (
    PackageValidator,
    SchemaValidationError,
    validate_package_definition,
)

__all__ = [
    "PackageValidator",
    "SchemaValidationError",
    "validate_package_definition",
]
