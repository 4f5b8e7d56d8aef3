# ============================================================================
# ARCGIS SCHEMA EXPORT
# ============================================================================
# STATUS: Collaborator - arcpy script generator
# PURPOSE: Turn a dataset and its attributes into a feature-class script
# ============================================================================
"""
ArcGIS Schema Export

Generates a standalone arcpy script that creates a feature class with
one field per attribute. The script is text for the user to download
and edit; nothing checks that ArcGIS accepts it.

Attribute type -> field type:

    string      TEXT (255)
    integer     LONG
    float       DOUBLE
    boolean     SHORT        0/1
    date        DATE
    enumerated  LONG         coded values listed as comments
    unknown     TEXT (255)
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from core.contracts import AttributeType
from core.models import Attribute, Dataset


@dataclass(frozen=True)
class FieldSpec:
    """Target geodatabase field type and optional length."""
    type: str
    length: Optional[int] = None


FIELD_TYPE_MAP: Dict[AttributeType, FieldSpec] = {
    AttributeType.STRING: FieldSpec("TEXT", 255),
    AttributeType.INTEGER: FieldSpec("LONG"),
    AttributeType.FLOAT: FieldSpec("DOUBLE"),
    AttributeType.BOOLEAN: FieldSpec("SHORT"),
    AttributeType.DATE: FieldSpec("DATE"),
    AttributeType.ENUMERATED: FieldSpec("LONG"),
    AttributeType.UNKNOWN: FieldSpec("TEXT", 255),
}

_EPSG_PATTERN = re.compile(r"EPSG:(\d+)", re.IGNORECASE)


def map_attribute_to_field(attribute: Attribute) -> FieldSpec:
    return FIELD_TYPE_MAP[attribute.attribute_type]


def schema_filename(dataset: Dataset) -> str:
    """Download name for a dataset's script."""
    return f"{dataset.id}_schema_arcpy.py"


def _domain_comment(attribute: Attribute) -> List[str]:
    name = attribute.key or ""
    lines = [f"# Domain suggestion for {name} ({attribute.label or ''}):"]
    for value in attribute.coded_values:
        lines.append(f"#   {value.code_text} = {value.label or ''}  -  {value.description or ''}")
    return lines


def build_arcgis_schema_script(dataset: Dataset, attributes: Sequence[Attribute]) -> str:
    """
    Render the arcpy script for a dataset.

    Geometry defaults to POLYGON; an EPSG code found in `projection`
    becomes the spatial reference.
    """
    ds_id = dataset.id or ""
    fc_name = dataset.objname or ds_id

    lines = [
        "# -*- coding: utf-8 -*-",
        "# Auto-generated ArcGIS schema script from Public Lands Data Catalog",
        f"# Dataset ID: {ds_id}",
    ]
    if dataset.title:
        lines.append(f"# Title: {dataset.title}")
    if dataset.description:
        lines.append(f"# Description: {dataset.description}")

    geometry_type = (dataset.geometry_type or "POLYGON").upper()
    projection = dataset.projection or ""
    epsg = _EPSG_PATTERN.search(projection)

    lines += [
        "",
        "import arcpy",
        "",
        "# Update these paths and settings before running",
        'gdb = r"C:\\path\\to\\your.gdb"',
        f'fc_name = "{fc_name}"',
        f'geometry_type = "{geometry_type}"  # e.g. "POINT", "POLYLINE", "POLYGON"',
    ]
    if epsg:
        lines.append(f"spatial_reference = arcpy.SpatialReference({epsg.group(1)})  # from {projection}")
    else:
        lines.append("spatial_reference = None  # set a spatial reference if desired")

    lines += [
        "",
        "# Create the feature class",
        "out_fc = arcpy.management.CreateFeatureclass(",
        "    gdb,",
        "    fc_name,",
        "    geometry_type,",
        "    spatial_reference=spatial_reference",
        ")[0]",
        "",
        "# Define fields: (name, type, alias, length, domain)",
        "fields = [",
    ]

    domain_blocks: List[List[str]] = []
    for attr in attributes:
        spec = map_attribute_to_field(attr)
        alias = (attr.label or "").replace('"', '""')
        length = "None" if spec.length is None else str(spec.length)
        lines.append(f'    ("{attr.key or ""}", "{spec.type}", "{alias}", {length}, None),')

        if attr.coded_values:
            domain_blocks.append(_domain_comment(attr))

    lines += [
        "]",
        "",
        "# Add fields to the feature class",
        "for name, ftype, alias, length, domain in fields:",
        '    kwargs = {"field_alias": alias}',
        '    if length is not None and ftype == "TEXT":',
        '        kwargs["field_length"] = length',
        "    if domain is not None:",
        '        kwargs["field_domain"] = domain',
        "    arcpy.management.AddField(out_fc, name, ftype, **kwargs)",
        "",
    ]

    if domain_blocks:
        lines += [
            "# ---------------------------------------------------------------------------",
            "# Suggested coded value domains for enumerated fields",
            "# You can use these comments to create geodatabase domains manually:",
            "# ---------------------------------------------------------------------------",
        ]
        for block in domain_blocks:
            lines += block
            lines.append("")

    return "\n".join(lines)


__all__ = [
    "FieldSpec",
    "FIELD_TYPE_MAP",
    "map_attribute_to_field",
    "schema_filename",
    "build_arcgis_schema_script",
]
