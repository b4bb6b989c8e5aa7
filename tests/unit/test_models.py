"""Tests for origin and error models."""

from __future__ import annotations

import dataclasses

import pytest
from pydantic import ValidationError

from yamlorigin.models.errors import (
    ConstructionError,
    DuplicateKeyError,
    ErrorReport,
    ParseError,
    StructuralError,
    YamlLoadError,
    YAMLSafetyError,
)
from yamlorigin.models.origin import EMPTY_LIST, EMPTY_MAP, Origin, OriginTrackedValue


@pytest.fixture
def origin() -> Origin:
    return Origin(resource="file [application.yml]", line=3, column=7)


class TestOrigin:
    """Source locations."""

    def test_location(self, origin: Origin) -> None:
        """Location is line:column, the string form adds the resource."""
        assert origin.location == "3:7"
        assert str(origin) == "file [application.yml] - 3:7"

    def test_frozen(self, origin: Origin) -> None:
        """Origins cannot be modified."""
        with pytest.raises(ValidationError):
            origin.line = 4  # type: ignore[misc]

    def test_equality_by_value(self, origin: Origin) -> None:
        """Origins compare by their fields."""
        assert origin == Origin(resource="file [application.yml]", line=3, column=7)
        assert origin != Origin(resource="file [application.yml]", line=3, column=8)


class TestOriginTrackedValue:
    """Payloads paired with their origin."""

    def test_delegates_to_payload(self, origin: Origin) -> None:
        """Equality, hash and string form come from the payload."""
        value = OriginTrackedValue.of("Elite", origin)
        assert value == "Elite"
        assert str(value) == "Elite"
        assert hash(value) == hash("Elite")
        assert value.origin is origin

    def test_equality_ignores_origin(self, origin: Origin) -> None:
        """Two tracked values are equal when their payloads are."""
        other = Origin(resource="other", line=1, column=1)
        assert OriginTrackedValue.of(8080, origin) == OriginTrackedValue.of(8080, other)
        assert OriginTrackedValue.of(8080, origin) != OriginTrackedValue.of(8081, origin)

    def test_null_becomes_empty_string(self, origin: Origin) -> None:
        """A null payload is stored as an empty string."""
        assert OriginTrackedValue.of(None, origin).value == ""

    def test_immutable(self, origin: Origin) -> None:
        """Tracked values cannot be modified."""
        value = OriginTrackedValue.of("x", origin)
        with pytest.raises(dataclasses.FrozenInstanceError):
            value.value = "y"  # type: ignore[misc]

    def test_repr_names_origin(self, origin: Origin) -> None:
        """The repr shows payload and origin."""
        assert repr(OriginTrackedValue.of("x", origin)) == (
            "OriginTrackedValue('x', origin=file [application.yml] - 3:7)"
        )

    def test_booleans_print_lowercase(self, origin: Origin) -> None:
        """Booleans render as true / false but keep a bool payload."""
        assert str(OriginTrackedValue.of(True, origin)) == "true"
        assert str(OriginTrackedValue.of(False, origin)) == "false"
        assert OriginTrackedValue.of(True, origin) == True  # noqa: E712


class TestEmptySentinels:
    """Values of empty collections."""

    def test_empty_map(self) -> None:
        """EMPTY_MAP behaves like an empty mapping."""
        assert EMPTY_MAP == {}
        assert len(EMPTY_MAP) == 0
        assert EMPTY_MAP != {"a": 1}
        assert repr(EMPTY_MAP) == "{}"
        with pytest.raises(KeyError):
            EMPTY_MAP["a"]

    def test_empty_list(self) -> None:
        """EMPTY_LIST equals any empty sequence but not a string."""
        assert EMPTY_LIST == []
        assert EMPTY_LIST == ()
        assert EMPTY_LIST != [1]
        assert EMPTY_LIST != ""
        assert list(EMPTY_LIST) == []
        assert repr(EMPTY_LIST) == "[]"

    def test_sentinels_are_distinct(self) -> None:
        """The two sentinels never compare equal."""
        assert EMPTY_MAP != EMPTY_LIST


class TestErrors:
    """Load errors and their reports."""

    def test_hierarchy(self) -> None:
        """Error classes share a common base."""
        assert issubclass(ParseError, YamlLoadError)
        assert issubclass(DuplicateKeyError, ConstructionError)
        assert issubclass(YAMLSafetyError, StructuralError)

    def test_message_includes_origin(self, origin: Origin) -> None:
        """The string form appends the origin."""
        error = ConstructionError("could not determine a constructor", origin)
        assert str(error) == "could not determine a constructor (file [application.yml] - 3:7)"
        assert error.message == "could not determine a constructor"

    def test_message_without_origin(self) -> None:
        """Without an origin only the message is shown."""
        assert str(StructuralError("unterminated collection")) == "unterminated collection"

    def test_report(self, origin: Origin) -> None:
        """Errors convert to serialisable reports."""
        report = DuplicateKeyError("found duplicate key 'a'", origin).to_report()
        assert report == ErrorReport(
            code="YAML_DUPLICATE_KEY", message="found duplicate key 'a'", origin=origin
        )
        assert report.model_dump()["origin"]["line"] == 3
