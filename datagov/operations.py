# =============================================================================
# datagov/operations.py - The tool catalog and argument validation
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   1. Declares the four query operations (name, description, schema, and
#      the CKAN action each one calls).
#   2. Validates an untyped argument bag against an operation's schema and
#      returns a typed dataclass, or raises InvalidParamsError.
#
# The operation set is closed and small, so validation is a plain table
# lookup: each FieldSpec carries its JSON type, and each JSON type maps to
# the Python types that satisfy it.
#
# VALIDATION RULES:
#   - The bag must be a mapping (None counts as empty).
#   - Unknown keys are rejected.
#   - Known keys must have the declared type.  A value of None counts as
#     "not supplied".
#   - Required keys must be present.
#   - bool is NOT a number, even though Python makes it a subclass of int.
# =============================================================================

from typing import Any, Mapping

from datagov.errors import InvalidParamsError, MethodNotFoundError
from datagov.models import (
    FieldSpec,
    GroupListArgs,
    OperationDescriptor,
    PackageSearchArgs,
    PackageShowArgs,
    TagListArgs,
)

PACKAGE_SEARCH = OperationDescriptor(
    name="package_search",
    description="Search for packages (datasets) on Data.gov",
    action="package_search",
    fields=(
        FieldSpec("q", "string", "Search query"),
        FieldSpec("sort", "string", 'Sort order (e.g., "score desc, name asc")'),
        FieldSpec("rows", "number", "Number of results per page"),
        FieldSpec("start", "number", "Starting offset for results"),
    ),
)

PACKAGE_SHOW = OperationDescriptor(
    name="package_show",
    description="Get details for a specific package (dataset)",
    action="package_show",
    fields=(FieldSpec("id", "string", "Package ID or name", required=True),),
)

GROUP_LIST = OperationDescriptor(
    name="group_list",
    description="List groups on Data.gov",
    action="group_list",
    fields=(
        FieldSpec("order_by", "string", "Field to order by"),
        FieldSpec("limit", "number", "Maximum number of results"),
        FieldSpec("offset", "number", "Offset for results"),
        FieldSpec("all_fields", "boolean", "Return all fields"),
    ),
)

TAG_LIST = OperationDescriptor(
    name="tag_list",
    description="List tags on Data.gov",
    action="tag_list",
    fields=(
        FieldSpec("query", "string", "Search query for tags"),
        FieldSpec("all_fields", "boolean", "Return all fields"),
    ),
)

OPERATIONS: tuple[OperationDescriptor, ...] = (PACKAGE_SEARCH, PACKAGE_SHOW, GROUP_LIST, TAG_LIST)

_BY_NAME = {op.name: op for op in OPERATIONS}

# Descriptive spellings accepted by invoke(); never advertised.
_ALIASES = {
    "search-packages": "package_search",
    "show-package": "package_show",
    "list-groups": "group_list",
    "list-tags": "tag_list",
}

_ARG_TYPES = {
    "package_search": PackageSearchArgs,
    "package_show": PackageShowArgs,
    "group_list": GroupListArgs,
    "tag_list": TagListArgs,
}


def _matches(json_type: str, value: Any) -> bool:
    if json_type == "string":
        return isinstance(value, str)
    if json_type == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if json_type == "boolean":
        return isinstance(value, bool)
    return False


def list_operations() -> list[OperationDescriptor]:
    """Return the catalog of query operations (a new list every call)."""
    return list(OPERATIONS)


def get_operation(name: str) -> OperationDescriptor:
    """Look up an operation by its tool name or descriptive alias.

    Raises:
        MethodNotFoundError: If no operation has that name.
    """
    op = _BY_NAME.get(_ALIASES.get(name, name))
    if op is None:
        raise MethodNotFoundError(f"Unknown tool: {name}")
    return op


def validate_arguments(op: OperationDescriptor, arguments: Mapping[str, Any] | None):
    """Check an argument bag against ``op``'s schema.

    Args:
        op: The operation being invoked.
        arguments: The caller's untyped argument mapping.

    Returns:
        The operation's validated argument dataclass.

    Raises:
        InvalidParamsError: On a non-mapping bag, an unknown key, a value of
            the wrong type, or a missing required key.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise InvalidParamsError(
            f"Invalid {op.name} arguments: expected an object, got {type(arguments).__name__}"
        )

    specs = {spec.name: spec for spec in op.fields}
    unknown = sorted(str(key) for key in arguments if key not in specs)
    if unknown:
        raise InvalidParamsError(f"Invalid {op.name} arguments: unknown field(s) {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for name, spec in specs.items():
        value = arguments.get(name)
        if value is None:
            if spec.required:
                raise InvalidParamsError(f"Invalid {op.name} arguments: '{name}' is required")
            continue
        if not _matches(spec.type, value):
            raise InvalidParamsError(
                f"Invalid {op.name} arguments: '{name}' must be a {spec.type}, "
                f"got {type(value).__name__}"
            )
        values[name] = value

    return _ARG_TYPES[op.name](**values)
