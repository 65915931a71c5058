"""Tests for the version range parser."""

import pytest

from versioning.errors import ParseErrorKind, VersionParseError
from versioning.models import PatchStrategy, Version
from versioning.parser import MAX_COMPONENT, parse_version, split_appendix


class TestParseVersion:
    """Test parsing of the supported range forms."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1.2.3", Version(1, 2, 3, None, PatchStrategy.NONE)),
            ("1.2", Version(1, 2, None, None, PatchStrategy.NONE)),
            ("7", Version(7, None, None, None, PatchStrategy.NONE)),
            ("~1.2.3", Version(1, 2, 3, None, PatchStrategy.PATCH)),
            ("~1.2", Version(1, 2, None, None, PatchStrategy.PATCH)),
            ("^1.2.3", Version(1, 2, 3, None, PatchStrategy.MINOR)),
            ("^1", Version(1, None, None, None, PatchStrategy.MINOR)),
            ("1.x", Version(1, None, None, None, PatchStrategy.MINOR)),
            ("1.x.5", Version(1, None, None, None, PatchStrategy.MINOR)),
            ("1.2.x", Version(1, 2, None, None, PatchStrategy.PATCH)),
            ("*", Version(patch_strategy=PatchStrategy.MAJOR)),
            ("x", Version(patch_strategy=PatchStrategy.MAJOR)),
            ("^1.4.5-lts.1", Version(1, 4, 5, "-lts.1", PatchStrategy.MINOR)),
            ("2.0.0-rc.1", Version(2, 0, 0, "-rc.1", PatchStrategy.NONE)),
            ("1.2.3+build.5", Version(1, 2, 3, "+build.5", PatchStrategy.NONE)),
            ("*-next", Version(appendix="-next", patch_strategy=PatchStrategy.MAJOR)),
            ("x.x.x", Version(patch_strategy=PatchStrategy.MAJOR)),
            ("*.*", Version(patch_strategy=PatchStrategy.MAJOR)),
            ("x.x", Version(patch_strategy=PatchStrategy.MAJOR)),
            ("*.x.x", Version(patch_strategy=PatchStrategy.MAJOR)),
            ("X.X-beta", Version(appendix="-beta", patch_strategy=PatchStrategy.MAJOR)),
        ],
    )
    def test_valid_ranges(self, raw, expected):
        """Each supported form parses into the expected structure."""
        assert parse_version(raw) == expected

    def test_components_wider_than_eight_bits(self):
        """Components above 255 are accepted."""
        v = parse_version("1.0.30001589")
        assert v.patch == 30001589

    def test_appendix_keeps_later_dashes(self):
        """Everything from the first dash is kept verbatim."""
        assert parse_version("1.0.0-alpha-2").appendix == "-alpha-2"


class TestParseErrors:
    """Test parse failures and their categories."""

    @pytest.mark.parametrize(
        "raw, kind",
        [
            ("", ParseErrorKind.EMPTY),
            ("abc", ParseErrorKind.INVALID_FORMAT),
            ("x.y", ParseErrorKind.INVALID_FORMAT),
            ("x.x.x.x", ParseErrorKind.INVALID_FORMAT),
            ("*.1", ParseErrorKind.INVALID_FORMAT),
            ("v1.2.3", ParseErrorKind.INVALID_FORMAT),
            ("^", ParseErrorKind.INVALID_FORMAT),
            ("~", ParseErrorKind.INVALID_FORMAT),
            ("^-beta", ParseErrorKind.INVALID_FORMAT),
            ("-beta", ParseErrorKind.INVALID_FORMAT),
            ("1.2.3.4", ParseErrorKind.INVALID_FORMAT),
            ("^1.2.3.4", ParseErrorKind.INVALID_FORMAT),
            ("1.a.3", ParseErrorKind.INVALID_FORMAT),
            ("^1.x", ParseErrorKind.INVALID_FORMAT),
            ("1..2", ParseErrorKind.INVALID_FORMAT),
            (">=1.2.3", ParseErrorKind.INVALID_FORMAT),
            ("1.2.3 - 2.0.0", ParseErrorKind.INVALID_FORMAT),
            ("workspace:*", ParseErrorKind.INVALID_FORMAT),
            (f"1.{MAX_COMPONENT + 1}.0", ParseErrorKind.COMPONENT_OVERFLOW),
            (f"^{MAX_COMPONENT + 1}", ParseErrorKind.COMPONENT_OVERFLOW),
        ],
    )
    def test_invalid_ranges(self, raw, kind):
        """Malformed input raises with the right category and raw string."""
        with pytest.raises(VersionParseError) as excinfo:
            parse_version(raw)
        assert excinfo.value.kind is kind
        assert excinfo.value.raw == raw

    def test_message_names_category(self):
        """The message carries the category and the offending string."""
        with pytest.raises(VersionParseError, match="InvalidFormat version range 'abc'"):
            parse_version("abc")

    def test_parse_error_is_value_error(self):
        """Callers can treat parse failures as ValueError."""
        with pytest.raises(ValueError):
            parse_version("nope")


class TestSplitAppendix:
    """Test appendix splitting."""

    def test_no_appendix(self):
        assert split_appendix("1.2.3") == ("1.2.3", None)

    def test_first_separator_wins(self):
        assert split_appendix("1.2.3+b-1") == ("1.2.3", "+b-1")
        assert split_appendix("1.2.3-a+b") == ("1.2.3", "-a+b")


class TestVersionModel:
    """Test Version invariants."""

    def test_exact_requires_major(self):
        """Only a wildcard may omit every numeric component."""
        with pytest.raises(ValueError):
            Version(patch_strategy=PatchStrategy.NONE)
        with pytest.raises(ValueError):
            Version(patch_strategy=PatchStrategy.MINOR)

    def test_structural_equality_and_hash(self):
        """Equal values hash alike and differ on the appendix."""
        assert Version(1, 2, 3) == Version(1, 2, 3)
        assert hash(Version(1, 2, 3)) == hash(Version(1, 2, 3))
        assert Version(1, 2, 3, "-a") != Version(1, 2, 3)

    def test_immutable(self):
        v = Version(1, 2, 3)
        with pytest.raises(AttributeError):
            v.major = 2
