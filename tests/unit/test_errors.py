from __future__ import annotations

from desensitize.errors import (
    ERROR_CODE_INVALID_CONFIG,
    ERROR_CODE_NOT_COPYABLE,
    ERROR_CODE_UNRESOLVED_MARKER,
    NotCopyableError,
    RedactionError,
    RegistryConfigError,
    UnresolvedMarkerError,
)


def test_error_codes_are_stable() -> None:
    assert ERROR_CODE_NOT_COPYABLE == "NOT_COPYABLE"
    assert ERROR_CODE_INVALID_CONFIG == "INVALID_CONFIG"


def test_not_copyable_error_payload() -> None:
    error = NotCopyableError(type_name="Session", reason="cannot pickle '_thread.lock' object")

    payload = error.to_dict()

    assert isinstance(error, RedactionError)
    assert payload["code"] == "NOT_COPYABLE"
    assert payload["type_name"] == "Session"
    assert "Session" in payload["message"]


def test_registry_config_error_includes_source_when_known() -> None:
    bare = RegistryConfigError(message="bad")
    located = RegistryConfigError(message="bad", source="redact.yaml")

    assert str(bare) == "INVALID_CONFIG: bad"
    assert str(located) == "INVALID_CONFIG: redact.yaml: bad"
    assert "source" not in bare.to_dict()
    assert located.to_dict()["source"] == "redact.yaml"


def test_unresolved_marker_error_names_the_field() -> None:
    error = UnresolvedMarkerError(
        type_name="Invoice",
        field_name="total",
        annotation="Annotated[Decimal, Sensitive()]",
        reason="name 'Decimal' is not defined",
    )

    assert isinstance(error, RedactionError)
    assert str(error).startswith("UNRESOLVED_MARKER: Invoice.total")
    assert error.to_dict()["code"] == ERROR_CODE_UNRESOLVED_MARKER
