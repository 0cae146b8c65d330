import typing
from dataclasses import fields
from types import UnionType
from typing import Union, get_args, get_origin, get_type_hints

from botocore.exceptions import ClientError

NoneType = type(None)


def client_error(code: str, operation: str = "ListHostedZones", message: str = "") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message or code}}, operation)


def hosted_zone(zone_id: str, name: str, *, private: bool = False) -> dict:
    return {
        "Id": f"/hostedzone/{zone_id}",
        "Name": name,
        "CallerReference": f"ref-{zone_id}",
        "Config": {"PrivateZone": private},
        "ResourceRecordSetCount": 2,
    }


def assert_config_dict_matches_dataclass(dataclass_type: type, typeddict_type: type) -> None:
    """Tests that a TypedDict matches its corresponding dataclass."""
    # noinspection PyTypeChecker
    dataclass_fields = {f.name: f.type for f in fields(dataclass_type)}
    typeddict_fields = get_type_hints(typeddict_type)

    assert set(dataclass_fields.keys()) == set(typeddict_fields.keys()), (
        f"{typeddict_type.__name__} and {dataclass_type.__name__} have different fields."
    )

    for field_name, dataclass_field_type in dataclass_fields.items():
        assert normalize_type(dataclass_field_type) == normalize_type(
            typeddict_fields[field_name]
        ), f"Type mismatch for field '{field_name}' in {dataclass_type.__name__}"


def normalize_type(type_hint: typing.Any) -> typing.Any:
    """Remove NoneType from a Union, keeping the other members intact."""
    origin = get_origin(type_hint)

    if origin is Union or origin is UnionType:
        non_none_args = tuple(arg for arg in get_args(type_hint) if arg is not NoneType)
        if not non_none_args:
            return NoneType
        if len(non_none_args) == 1:
            return non_none_args[0]
        return typing.Union[non_none_args]  # noqa: UP007

    return type_hint
