from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Annotated

import pytest

from desensitize import Ref, Sensitive, UnresolvedMarkerError, sensitive
from desensitize.fields import UNKNOWN_TYPE, field_specs, is_struct

if TYPE_CHECKING:
    from decimal import Decimal


@dataclass
class Login:
    user: str
    password: str = sensitive()
    token: Annotated[str, Sensitive("token")] = ""
    pin: int = field(default=0, metadata={"sensitive": "pin"})
    backup: Ref[str] | None = sensitive("backup", default=None)
    _salt: str = sensitive(default="")
    note: str = field(default="", metadata={"owner": "ops"})


def test_field_specs_read_both_marker_spellings() -> None:
    specs = {spec.name: spec for spec in field_specs(Login)}

    assert [spec.name for spec in field_specs(Login)] == [
        "user",
        "password",
        "token",
        "pin",
        "backup",
        "_salt",
        "note",
    ]
    assert not specs["user"].sensitive
    assert specs["password"].sensitive and specs["password"].key == "-"
    assert specs["token"].sensitive and specs["token"].key == "token"
    assert specs["token"].type is str
    assert specs["pin"].key == "pin"
    assert specs["backup"].type == (Ref[str] | None)
    assert not specs["note"].sensitive


def test_private_fields_are_not_settable() -> None:
    specs = {spec.name: spec for spec in field_specs(Login)}

    assert not specs["_salt"].settable
    assert specs["password"].settable


def test_field_specs_are_cached_per_class() -> None:
    assert field_specs(Login) is field_specs(Login)


def test_sensitive_keeps_extra_metadata() -> None:
    @dataclass
    class Tagged:
        value: str = sensitive("k", default="", metadata={"owner": "ops"})

    spec = field_specs(Tagged)[0]
    assert spec.sensitive and spec.key == "k"
    assert Tagged.__dataclass_fields__["value"].metadata["owner"] == "ops"


def test_is_struct_only_matches_instances() -> None:
    assert is_struct(Login(user="u", password="p"))
    assert not is_struct(Login)
    assert not is_struct({"user": "u"})


@dataclass
class Invoice:
    number: str
    total: Decimal | None = None
    card: Annotated[str, Sensitive("card")] = ""
    holder: str = sensitive("holder", default="")


@dataclass
class Ledger:
    balance: Annotated[Decimal, Sensitive()] = None


def test_unresolvable_annotation_only_affects_its_own_field() -> None:
    specs = {spec.name: spec for spec in field_specs(Invoice)}

    assert specs["number"].type is str
    assert specs["total"].type is UNKNOWN_TYPE
    assert not specs["total"].sensitive
    assert specs["card"].sensitive and specs["card"].key == "card"
    assert specs["card"].type is str
    assert specs["holder"].sensitive and specs["holder"].key == "holder"


def test_local_class_reference_keeps_annotated_marker() -> None:
    @dataclass
    class Line:
        sku: str = ""

    @dataclass
    class Basket:
        line: Line
        coupon: Annotated[str, Sensitive("coupon")] = ""

    specs = {spec.name: spec for spec in field_specs(Basket)}

    assert specs["line"].type is UNKNOWN_TYPE
    assert specs["coupon"].sensitive and specs["coupon"].key == "coupon"


def test_unresolvable_sensitive_annotation_raises() -> None:
    with pytest.raises(UnresolvedMarkerError) as excinfo:
        field_specs(Ledger)

    payload = excinfo.value.to_dict()
    assert payload["code"] == "UNRESOLVED_MARKER"
    assert payload["field_name"] == "balance"
    assert "Sensitive" in payload["annotation"]
