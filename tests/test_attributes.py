"""Tests for weight, pack and feature extraction and unit economics."""

import pytest

from where_to_buy.utils.attributes import (
    compare_sizes,
    compute_economics,
    extract_features,
    extract_pack_size,
    extract_weight,
)


class TestExtractWeight:
    def test_grams(self):
        match = extract_weight("Dove Soap 100g")
        assert match.group(1) == "100"
        assert match.group(2).lower() == "g"

    def test_space_between_number_and_unit(self):
        match = extract_weight("Dettol Liquid 500 ml")
        assert match.group(0) == "500 ml"

    def test_decimal_litres(self):
        match = extract_weight("Sunflower Oil 1.5L")
        assert match.group(1) == "1.5"
        assert match.group(2) == "L"

    def test_first_occurrence_wins(self):
        match = extract_weight("Vim Gel 250ml pack with 2kg bonus")
        assert match.group(0) == "250ml"

    def test_no_weight(self):
        assert extract_weight("Dove Beauty Bar") is None
        assert extract_weight("") is None
        assert extract_weight(None) is None


class TestExtractPackSize:
    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Dove Soap Pack of 4", "4"),
            ("Lux Soap 3 x 100g", "3"),
            ("Santoor 6 pack", "6"),
            ("Tissues 200 count", "200"),
            ("Scrubber 2pc", "2"),
            ("Cup Set of 6", "6"),
        ],
    )
    def test_patterns(self, title, expected):
        assert extract_pack_size(title).group(1) == expected

    def test_no_pack(self):
        assert extract_pack_size("Dove Soap") is None


class TestExtractFeatures:
    def test_keywords(self):
        features = extract_features("Dettol Original Antibacterial Soap")
        assert "original" in features
        assert "antibacterial" in features
        assert "anti-bacterial" in features

    def test_cooling_maps_to_two_tags(self):
        features = extract_features("Cinthol Cooling Soap")
        assert features == ["cool", "icy"]

    def test_all_keywords_required(self):
        assert "germ protection" in extract_features("Lifebuoy Germ Protection Soap")
        assert "germ protection" not in extract_features("Lifebuoy Germ Soap")

    def test_no_features(self):
        assert extract_features("Vim Bar") == []


class TestComputeEconomics:
    def test_kilograms_convert_to_grams(self):
        attrs = compute_economics(extract_weight("Atta 2kg"), None, 100.0)
        assert attrs.individual_weight == 2000
        assert attrs.total_weight == 2000
        assert attrs.weight_unit == "g"

    def test_litres_convert_to_millilitres(self):
        attrs = compute_economics(extract_weight("Oil 1.5L"), None, 150.0)
        assert attrs.total_weight == 1500
        assert attrs.weight_unit == "ml"
        assert attrs.unit_price == pytest.approx(10.0)
        assert attrs.unit_price_formatted == "₹10.00/100ml"

    def test_unit_price_per_100g(self):
        attrs = compute_economics(extract_weight("Soap 100g"), None, 50.0)
        assert attrs.unit_price == pytest.approx(50.0)
        assert attrs.unit_price_formatted == "₹50.00/100g"

    def test_pack_multiplies_total(self):
        title = "Pack of 4, 100g each"
        attrs = compute_economics(extract_weight(title), extract_pack_size(title), 180.0)
        assert attrs.pack_size == 4
        assert attrs.individual_weight == 100
        assert attrs.total_weight == 400
        assert attrs.unit_price == pytest.approx(45.0)

    def test_no_weight_means_no_unit_price(self):
        attrs = compute_economics(None, None, 99.0)
        assert attrs.total_weight == 0
        assert attrs.unit_price == 0
        assert attrs.unit_price_formatted is None
        assert attrs.price_value == 99.0

    def test_missing_price(self):
        attrs = compute_economics(extract_weight("Soap 100g"), None, None)
        assert attrs.unit_price == 0
        assert attrs.price_value == 0


class TestCompareSizes:
    def test_same_size(self):
        assert compare_sizes(extract_weight("Dettol 500ml"), "500ml")

    def test_spacing_and_case_ignored(self):
        assert compare_sizes(extract_weight("Dettol 500 ML"), "500ml")

    def test_within_tolerance(self):
        assert compare_sizes(extract_weight("Oil 1.05l"), "1l")

    def test_different_values(self):
        assert not compare_sizes(extract_weight("Dettol 250ml"), "500ml")

    def test_volume_never_matches_weight(self):
        assert not compare_sizes(extract_weight("Phenyl 2L"), "2kg")

    def test_units_are_not_converted(self):
        assert not compare_sizes(extract_weight("Oil 2L"), "2000ml")

    def test_missing_inputs(self):
        assert not compare_sizes(None, "500ml")
        assert not compare_sizes(extract_weight("Dettol 500ml"), None)

    def test_malformed_size(self):
        assert not compare_sizes(extract_weight("Dettol 500ml"), "ml")
