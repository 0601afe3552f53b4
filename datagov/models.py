# =============================================================================
# datagov/models.py - Data Models (the "nouns" of the adapter)
# =============================================================================
#
# Every object here lives for exactly one call: it is built, used, and
# thrown away inside a single tool invocation or resource read.  Nothing is
# cached and nothing is shared between calls.
#
# THREE GROUPS OF MODELS:
#   1. Catalog descriptors (FieldSpec, OperationDescriptor, ResourceTemplate)
#      describe what callers may ask for.  They render to the JSON-Schema
#      shapes MCP clients expect.
#   2. Validated arguments (PackageSearchArgs, ...) are what an untyped
#      argument bag becomes once it has passed validation.
#   3. Results (TextContent, ResponseEnvelope, ResourceContents) are the
#      uniform output shapes.
# =============================================================================

from dataclasses import dataclass, field, fields
from typing import Any, Optional


# -----------------------------------------------------------------------------
# FieldSpec: one argument an operation accepts
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class FieldSpec:
    """A single named argument with its JSON type."""

    name: str
    type: str                          # "string" | "number" | "boolean"
    description: str
    required: bool = False

    def to_schema(self) -> dict[str, str]:
        return {"type": self.type, "description": self.description}


# -----------------------------------------------------------------------------
# OperationDescriptor: one entry of the tool catalog
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class OperationDescriptor:
    """A named query operation and the CKAN action it maps to."""

    name: str                          # "package_search"
    description: str                   # Shown to the calling LLM
    action: str                        # CKAN action path segment
    fields: tuple[FieldSpec, ...] = ()

    def input_schema(self) -> dict[str, Any]:
        """Render the JSON-Schema object advertised for this operation."""
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {spec.name: spec.to_schema() for spec in self.fields},
        }
        required = [spec.name for spec in self.fields if spec.required]
        if required:
            schema["required"] = required
        return schema

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


@dataclass(frozen=True)
class ResourceTemplate:
    """A URI template for the raw resource reader."""

    uri_template: str
    name: str
    description: str


# -----------------------------------------------------------------------------
# Validated arguments
# -----------------------------------------------------------------------------
# Each dataclass mirrors one operation's schema.  Unset fields stay None and
# are left out of the query string; set fields go out exactly as given.
# -----------------------------------------------------------------------------
def _render_param(value: Any) -> Any:
    # CKAN expects lowercase booleans ("true"), not Python's "True".
    if isinstance(value, bool):
        return "true" if value else "false"
    # 10.0 goes out as "10", the way a JSON client would send it.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass
class _QueryArgs:
    def to_params(self) -> dict[str, Any]:
        """Return the query parameters, skipping fields that were not set."""
        return {
            f.name: _render_param(getattr(self, f.name))
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass
class PackageSearchArgs(_QueryArgs):
    q: Optional[str] = None
    sort: Optional[str] = None
    rows: Optional[float] = None
    start: Optional[float] = None


@dataclass
class PackageShowArgs(_QueryArgs):
    id: str = ""

    def to_params(self) -> dict[str, Any]:
        return {"id": self.id}


@dataclass
class GroupListArgs(_QueryArgs):
    order_by: Optional[str] = None
    limit: Optional[float] = None
    offset: Optional[float] = None
    all_fields: Optional[bool] = None


@dataclass
class TagListArgs(_QueryArgs):
    query: Optional[str] = None
    all_fields: Optional[bool] = None


# -----------------------------------------------------------------------------
# Results
# -----------------------------------------------------------------------------
@dataclass
class TextContent:
    """One text block of a tool result."""

    text: str
    type: str = "text"


@dataclass
class ResponseEnvelope:
    """The uniform result of every tool invocation.

    The envelope is returned on failure too: ``is_error`` and the message
    text are the only failure signal for the four query tools.
    """

    content: list[TextContent] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "ResponseEnvelope":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def failure(cls, text: str) -> "ResponseEnvelope":
        return cls(content=[TextContent(text=text)], is_error=True)

    @property
    def text(self) -> str:
        return self.content[0].text if self.content else ""

    def to_dict(self) -> dict[str, Any]:
        """MCP wire shape: ``{"content": [...], "isError": bool}``."""
        return {
            "content": [{"type": block.type, "text": block.text} for block in self.content],
            "isError": self.is_error,
        }


@dataclass
class ResourceContents:
    """The body of a resource read, embedded as a ``data:`` URI."""

    uri: str
    text: str
    mime_type: Optional[str] = None
