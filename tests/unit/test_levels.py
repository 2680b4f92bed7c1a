"""Tests for administrative levels and features."""

import pytest

from boundary_lookup import UNKNOWN, AdminLevel, Feature


class TestAdminLevel:
    """Tests for AdminLevel."""

    def test_order_root_to_leaf(self):
        levels = AdminLevel.ordered()

        assert [level.label for level in levels] == [
            "Province",
            "District",
            "Sector",
            "Cell",
            "Village",
        ]
        assert [level.order for level in levels] == [0, 1, 2, 3, 4]

    def test_attributes(self):
        assert AdminLevel.PROVINCE.name_attribute == "NAME_1"
        assert AdminLevel.VILLAGE.name_attribute == "NAME_5"
        assert AdminLevel.CELL.id_attribute == "ID_4"

    def test_ancestors_and_descendants(self):
        assert AdminLevel.SECTOR.ancestors == [AdminLevel.PROVINCE, AdminLevel.DISTRICT]
        assert AdminLevel.SECTOR.descendants == [AdminLevel.CELL, AdminLevel.VILLAGE]
        assert AdminLevel.VILLAGE.descendants == []

    def test_from_keyword(self):
        assert AdminLevel.from_keyword("cell") == AdminLevel.CELL
        assert AdminLevel.from_keyword("Village") == AdminLevel.VILLAGE
        assert AdminLevel.from_keyword("ce") is None
        assert AdminLevel.from_keyword(None) is None

    def test_coerce(self):
        assert AdminLevel.coerce(AdminLevel.SECTOR) == AdminLevel.SECTOR
        assert AdminLevel.coerce("District") == AdminLevel.DISTRICT
        assert AdminLevel.coerce(None) is None
        with pytest.raises(ValueError):
            AdminLevel.coerce("county")


class TestFeature:
    """Tests for Feature attributes."""

    def test_label_sentinel(self):
        feature = Feature(geometry=None, properties={"NAME_1": "", "NAME_2": None, "ID_1": 0})

        assert feature.label("NAME_1") == UNKNOWN
        assert feature.label("NAME_2") == UNKNOWN
        assert feature.label("NAME_3") == UNKNOWN
        assert feature.label("ID_1") == "0"

    def test_hierarchy_and_ids(self, sample_features):
        feature = sample_features[2]

        assert feature.hierarchy() == {
            "Village": "Kabeza",
            "Cell": "Nyabisindu",
            "Sector": "Remera",
            "District": "Gasabo",
            "Province": "Kigali City",
            "Country": "Rwanda",
        }
        assert feature.feature_id == "1-1-1-1-2-3"
        assert feature.id_path() == "P1 / D1 / S1 / C2 / V3"

    def test_from_geojson_drops_unsupported_geometry(self):
        feature = Feature.from_geojson(
            {"type": "Feature", "geometry": {"type": "Point", "coordinates": [0, 0]}, "properties": None}
        )

        assert feature.geometry is None
        assert feature.is_polygonal is False
        assert feature.bounds is None
        assert feature.feature_id == "-".join([UNKNOWN] * 6)

    def test_hashable_by_identity(self, sample_features):
        feature = sample_features[0]

        assert hash(feature) == hash(feature)
        assert len(set(sample_features)) == len(sample_features)
        assert {feature: "Rugando"}[feature] == "Rugando"

    def test_to_geojson(self, sample_collection):
        item = sample_collection["features"][0]

        assert Feature.from_geojson(item).to_geojson() == item
