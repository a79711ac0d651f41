from __future__ import annotations

"""
Schema Domain Data Models.

Defines the serialisable nodes produced by the extraction engine: one
PropDefinition per component property and one SchemaEntry per component
source file.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PropDefinition:
    """
    Schema node describing a single property.

    A node carries either no breakdown (plain type), an enumerated literal
    set (`options`) or a nested breakdown (`children`), never both.

    Attributes:
        name: Property name as declared.
        type: Semantic label or cleaned display string of the property type.
        required: False when the property is declared optional.
        options: Sorted literal values for literal enumerations.
        children: Nested definitions for object and union breakdowns.
    """
    name: str
    type: str
    required: bool
    options: Optional[List[str]] = None
    children: Optional[List["PropDefinition"]] = None

    def __post_init__(self) -> None:
        if self.options is not None and self.children is not None:
            raise ValueError(
                f"PropDefinition '{self.name}' cannot carry both options and children."
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to a plain dict, omitting absent breakdowns."""
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "required": self.required,
        }
        if self.options is not None:
            data["options"] = list(self.options)
        if self.children is not None:
            data["children"] = [c.to_dict() for c in self.children]
        return data


@dataclass(frozen=True)
class SchemaEntry:
    """
    Property schema of one component.

    Attributes:
        path: Canonical path key (relative, extension and '/index' stripped).
        props: Property definitions in declaration order.
    """
    path: str
    props: List[PropDefinition] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "props": [p.to_dict() for p in self.props],
        }


SchemaMap = Dict[str, SchemaEntry]


def schema_map_to_dict(schema_map: SchemaMap) -> Dict[str, Any]:
    """
    Convert a schema map into a JSON-ready mapping ordered by path key.

    Args:
        schema_map: Engine-owned mapping of path key to entry.

    Returns:
        Dict[str, Any]: Plain mapping suitable for json.dumps.
    """
    return {key: schema_map[key].to_dict() for key in sorted(schema_map)}
