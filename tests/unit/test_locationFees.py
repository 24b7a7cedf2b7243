"""Unit tests for the static location fee table."""

import pytest

from carhire.algorithms.locationFees import LOCATION_FEES, get_location_fee, list_locations


class TestGetLocationFee:

    @pytest.mark.parametrize(
        "name,fee",
        [
            ("Aeroport Cluj-Napoca", 0),
            ("Cluj-Napoca", 10),
            ("Targu Mures", 70),
            ("Brasov", 180),
            ("Timisoara", 200),
            ("Bucuresti", 220),
        ],
    )
    def test_known_locations(self, name, fee):
        assert get_location_fee(name) == fee

    def test_unknown_location_is_free(self):
        assert get_location_fee("Paris") == 0

    def test_match_is_case_sensitive(self):
        assert get_location_fee("cluj-napoca") == 0

    @pytest.mark.parametrize("name", [None, ""])
    def test_missing_location_is_free(self, name):
        assert get_location_fee(name) == 0


class TestListLocations:

    def test_fifteen_locations(self):
        assert len(list_locations()) == 15

    def test_fees_within_range(self):
        assert all(0 <= loc.price <= 220 for loc in LOCATION_FEES)
