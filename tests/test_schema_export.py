# ============================================================================
# SCHEMA EXPORT TESTS
# ============================================================================
# STATUS: Tests - arcpy script generation and the CLI tool
# PURPOSE: Verify field mapping, spatial reference and domain comments
# ============================================================================
"""
Schema Export Tests

Run with:
    pytest tests/test_schema_export.py -v
"""

import json
import logging

import pytest

from conftest import NORMALIZED_DOC
from core.contracts import AttributeType
from core.models import Attribute, Dataset
from services.schema_export import (
    FIELD_TYPE_MAP,
    build_arcgis_schema_script,
    map_attribute_to_field,
    schema_filename,
)
from tools.export_schema import export_schemas, main


# ============================================================================
# FIELD MAPPING
# ============================================================================

class TestFieldMapping:

    @pytest.mark.parametrize("declared,field_type,length", [
        ("string", "TEXT", 255),
        ("integer", "LONG", None),
        ("float", "DOUBLE", None),
        ("boolean", "SHORT", None),
        ("date", "DATE", None),
        ("enumerated", "LONG", None),
        ("geometry", "TEXT", 255),
        (None, "TEXT", 255),
    ])
    def test_type_map(self, declared, field_type, length):
        spec = map_attribute_to_field(Attribute(id="f", type=declared))
        assert (spec.type, spec.length) == (field_type, length)

    def test_every_type_mapped(self):
        assert set(FIELD_TYPE_MAP) == set(AttributeType)


# ============================================================================
# SCRIPT
# ============================================================================

class TestBuildScript:

    def _roads(self, normalized_store):
        roads = normalized_store.get_dataset_by_id("roads")
        return build_arcgis_schema_script(roads, normalized_store.get_attributes_for_dataset(roads))

    def test_header_and_feature_class(self, normalized_store):
        script = self._roads(normalized_store)
        assert "# Dataset ID: roads" in script
        assert "# Title: Roads" in script
        assert 'fc_name = "Roads_Line"' in script
        assert 'geometry_type = "POLYLINE"' in script

    def test_epsg_spatial_reference(self, normalized_store):
        script = self._roads(normalized_store)
        assert "spatial_reference = arcpy.SpatialReference(26912)" in script

    def test_fields_in_reference_order(self, normalized_store):
        lines = self._roads(normalized_store).splitlines()
        fields = [line for line in lines if line.startswith('    ("')]
        assert fields == [
            '    ("width", "DOUBLE", "Width", None, None),',
            '    ("surface", "LONG", "Surface", None, None),',
        ]

    def test_coded_values_listed_in_order(self, normalized_store):
        lines = self._roads(normalized_store).splitlines()
        rows = [line for line in lines if line.startswith("#   ")]
        assert rows == [
            "#   1 = Paved  -  Asphalt",
            "#   2 = Gravel  -  Improved gravel",
        ]
        assert "# Domain suggestion for surface (Surface):" in lines

    def test_defaults_without_geometry_or_projection(self):
        script = build_arcgis_schema_script(Dataset(id="t"), [Attribute(id="name", type="string")])
        assert 'fc_name = "t"' in script
        assert 'geometry_type = "POLYGON"' in script
        assert "spatial_reference = None" in script
        assert '    ("name", "TEXT", "", 255, None),' in script
        assert "Suggested coded value domains" not in script

    def test_alias_quotes_escaped(self):
        script = build_arcgis_schema_script(
            Dataset(id="t"), [Attribute(id="h", label='Height "ft"', type="float")]
        )
        assert '    ("h", "DOUBLE", "Height ""ft""", None, None),' in script

    def test_filename(self):
        assert schema_filename(Dataset(id="roads")) == "roads_schema_arcpy.py"


# ============================================================================
# CLI TOOL
# ============================================================================

class TestExportTool:

    def test_export_writes_files(self, normalized_store, tmp_path):
        paths = export_schemas(normalized_store, ["roads", "wells"], tmp_path / "out")

        assert [p.name for p in paths] == ["roads_schema_arcpy.py", "wells_schema_arcpy.py"]
        assert "arcpy.management.CreateFeatureclass(" in paths[0].read_text(encoding="utf-8")

    def test_export_logged_as_tool(self, normalized_store, tmp_path, caplog):
        with caplog.at_level(logging.INFO, logger="tools.export_schema"):
            export_schemas(normalized_store, ["roads"], tmp_path)

        record = caplog.records[-1]
        assert record.data["component"] == "tool"
        assert record.data["path"].endswith("roads_schema_arcpy.py")

    def test_export_unknown_dataset(self, normalized_store, tmp_path):
        with pytest.raises(KeyError):
            export_schemas(normalized_store, ["nonexistent"], tmp_path)

    def test_main_from_file(self, tmp_path, capsys):
        catalog = tmp_path / "catalog.json"
        catalog.write_text(json.dumps(NORMALIZED_DOC), encoding="utf-8")

        code = main(["roads", "--catalog", str(catalog), "--output-dir", str(tmp_path)])

        assert code == 0
        assert (tmp_path / "roads_schema_arcpy.py").is_file()
        assert "Wrote" in capsys.readouterr().out

    def test_main_load_failure(self, tmp_path, capsys):
        code = main(["roads", "--catalog", str(tmp_path / "missing.json")])
        assert code == 1
        assert "Error loading catalog" in capsys.readouterr().err
