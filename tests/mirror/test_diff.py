"""Tests for missing-version computation."""

from nuget_mirror.mirror import compute_missing
from nuget_mirror.models import VersionSet
from nuget_mirror.utils import normalize_version


class TestComputeMissing:
    """Test compute_missing function."""

    def test_empty_destination(self):
        """Test every source version is missing from an empty destination."""
        assert compute_missing(["1.0.0", "1.1.0", "2.0.0-beta"], []) == ["1.0.0", "1.1.0", "2.0.0-beta"]

    def test_keeps_source_order(self):
        """Test the result follows source order, not destination order."""
        assert compute_missing(["3.0.0", "1.0.0", "2.0.0"], ["1.0.0"]) == ["3.0.0", "2.0.0"]

    def test_up_to_date(self):
        """Test nothing is missing when the destination has everything."""
        assert compute_missing(["1.0.0", "1.1.0"], ["1.1.0", "1.0.0", "0.9.0"]) == []

    def test_empty_source(self):
        """Test an empty source has nothing to mirror."""
        assert compute_missing([], ["1.0.0"]) == []

    def test_exact_string_identity(self):
        """Test equivalent spellings are different versions by default."""
        assert compute_missing(["1.0", "1.0.0.0", "1.0.0-Beta"], ["1.0.0", "1.0.0-beta"]) == [
            "1.0",
            "1.0.0.0",
            "1.0.0-Beta",
        ]

    def test_duplicates_listed_once(self):
        """Test repeated source versions appear once."""
        assert compute_missing(["1.0.0", "1.0.0", "2.0.0"], []) == ["1.0.0", "2.0.0"]

    def test_normalized_key(self):
        """Test a normalization key treats equivalent spellings as present."""
        missing = compute_missing(["1.0", "1.0.0.0", "2.0.0-Beta", "3.0"], ["1.0.0", "2.0.0-beta"], key=normalize_version)

        assert missing == ["3.0"]

    def test_version_sets(self):
        """Test VersionSet inputs are compared by their versions."""
        source = VersionSet(feed_name="public", package_name="Contoso.Lib", versions=["1.0.0", "1.1.0"])
        destination = VersionSet(feed_name="internal", package_name="Contoso.Lib", versions=["1.0.0"])

        assert compute_missing(source, destination) == ["1.1.0"]

    def test_result_is_subset_of_source(self):
        """Test every missing version comes from the source and not the destination."""
        source = ["1.0.0", "1.1.0", "1.2.0", "2.0.0"]
        destination = ["1.1.0", "2.0.0", "9.9.9"]

        missing = compute_missing(source, destination)

        assert set(missing) <= set(source)
        assert not set(missing) & set(destination)
        assert set(missing) | (set(source) & set(destination)) == set(source)
