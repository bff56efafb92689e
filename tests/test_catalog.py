"""Tests for catalog lookups."""

import logging

import pytest

from lens_catalog.catalog import (
    CameraNotFoundError,
    CatalogIndex,
    LensNotFoundError,
    RentalNotFoundError,
)


class TestLookups:
    """Tests for id lookups."""

    def test_get_lens(self, catalog_index):
        assert catalog_index.get_lens("zeiss-sp-50").display_name == "Zeiss Supreme Prime 50mm"

    def test_get_lens_missing(self, catalog_index):
        with pytest.raises(LensNotFoundError) as exc_info:
            catalog_index.get_lens("nope")
        assert exc_info.value.lens_id == "nope"

    def test_find_lens_missing(self, catalog_index):
        assert catalog_index.find_lens("nope") is None

    def test_get_camera(self, catalog_index):
        assert catalog_index.get_camera("venice").model == "Venice"
        with pytest.raises(CameraNotFoundError):
            catalog_index.get_camera("nope")

    def test_get_rental(self, catalog_index):
        assert catalog_index.get_rental("r1").name == "Camera House"
        with pytest.raises(RentalNotFoundError):
            catalog_index.get_rental("nope")


class TestResolveLenses:
    """Tests for resolving stored ids."""

    def test_keeps_order(self, catalog_index):
        lenses = catalog_index.resolve_lenses(["arri-sig-280", "cooke-s4-32"])
        assert [lens.id for lens in lenses] == ["arri-sig-280", "cooke-s4-32"]

    def test_skips_stale_ids(self, catalog_index, caplog):
        with caplog.at_level(logging.DEBUG, logger="lens_catalog.catalog"):
            lenses = catalog_index.resolve_lenses(["gone", "cooke-s4-32"])
        assert [lens.id for lens in lenses] == ["cooke-s4-32"]
        assert "gone" in caplog.text


class TestJoins:
    """Tests for rental and format joins."""

    def test_lenses_for_rental(self, catalog_index):
        lenses = catalog_index.lenses_for_rental("r2")
        assert [lens.id for lens in lenses] == ["zeiss-sp-50", "arri-sig-280"]

    def test_rentals_for_lens(self, catalog_index):
        rentals = catalog_index.rentals_for_lens("zeiss-sp-50")
        assert [r.id for r in rentals] == ["r1", "r2"]
        assert catalog_index.rentals_for_lens("cooke-s4-75") == []

    def test_rentable_lens_ids(self, catalog_index):
        assert catalog_index.rentable_lens_ids() == {"cooke-s4-32", "zeiss-sp-50", "arri-sig-280"}

    def test_formats_for_camera(self, catalog_index):
        formats = catalog_index.formats_for_camera("venice")
        assert [f.id for f in formats] == ["venice-6k", "venice-4k"]
        assert catalog_index.formats_for_camera("nope") == []

    def test_available_formats(self, catalog_index):
        assert catalog_index.available_formats() == ["FF", "LF", "S35"]


class TestEmptyIndex:
    """Tests for an index without a catalog."""

    def test_empty(self):
        index = CatalogIndex()
        assert index.lenses == []
        assert index.cameras == []
        assert index.resolve_lenses(["a"]) == []
        assert index.available_formats() == []
