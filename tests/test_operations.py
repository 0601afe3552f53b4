import pytest

from datagov.errors import INVALID_PARAMS, METHOD_NOT_FOUND, InvalidParamsError, MethodNotFoundError
from datagov.models import GroupListArgs, PackageSearchArgs, PackageShowArgs, TagListArgs
from datagov.operations import get_operation, list_operations, validate_arguments


def test_catalog_lists_four_operations_in_stable_order():
    first = [op.name for op in list_operations()]
    second = [op.name for op in list_operations()]

    assert first == ["package_search", "package_show", "group_list", "tag_list"]
    assert first == second


def test_catalog_returns_a_fresh_list():
    ops = list_operations()
    ops.clear()

    assert len(list_operations()) == 4


def test_package_show_schema_requires_id():
    schema = get_operation("package_show").input_schema()

    assert schema == {
        "type": "object",
        "properties": {"id": {"type": "string", "description": "Package ID or name"}},
        "required": ["id"],
    }


def test_optional_only_schema_has_no_required_key():
    schema = get_operation("group_list").input_schema()

    assert "required" not in schema
    assert schema["properties"]["all_fields"]["type"] == "boolean"
    assert schema["properties"]["limit"]["type"] == "number"


def test_descriptor_to_dict_uses_mcp_field_names():
    payload = get_operation("tag_list").to_dict()

    assert payload["name"] == "tag_list"
    assert payload["description"] == "List tags on Data.gov"
    assert set(payload["inputSchema"]["properties"]) == {"query", "all_fields"}


@pytest.mark.parametrize(
    "alias, name",
    [
        ("search-packages", "package_search"),
        ("show-package", "package_show"),
        ("list-groups", "group_list"),
        ("list-tags", "tag_list"),
    ],
)
def test_descriptive_aliases_resolve(alias, name):
    assert get_operation(alias).name == name


def test_unknown_operation_is_method_not_found():
    with pytest.raises(MethodNotFoundError) as info:
        get_operation("does_not_exist")

    assert info.value.code == METHOD_NOT_FOUND
    assert "does_not_exist" in info.value.message


def test_empty_bag_is_valid_for_optional_operations():
    assert validate_arguments(get_operation("package_search"), {}) == PackageSearchArgs()
    assert validate_arguments(get_operation("tag_list"), None) == TagListArgs()


def test_valid_search_arguments_pass_through():
    args = validate_arguments(
        get_operation("package_search"), {"q": "water", "sort": "name asc", "rows": 5, "start": 2.5}
    )

    assert args == PackageSearchArgs(q="water", sort="name asc", rows=5, start=2.5)


def test_none_values_count_as_absent():
    args = validate_arguments(get_operation("group_list"), {"limit": None, "order_by": "name"})

    assert args == GroupListArgs(order_by="name")


def test_missing_required_id_is_rejected():
    with pytest.raises(InvalidParamsError) as info:
        validate_arguments(get_operation("package_show"), {})

    assert info.value.code == INVALID_PARAMS
    assert "'id' is required" in info.value.message


@pytest.mark.parametrize(
    "op_name, bag",
    [
        ("package_show", {"id": 42}),
        ("package_search", {"rows": "10"}),
        ("package_search", {"q": ["a", "b"]}),
        ("group_list", {"all_fields": "true"}),
        ("group_list", {"limit": True}),
        ("tag_list", {"all_fields": 1}),
    ],
)
def test_mistyped_fields_are_rejected(op_name, bag):
    with pytest.raises(InvalidParamsError):
        validate_arguments(get_operation(op_name), bag)


def test_unknown_fields_are_rejected():
    with pytest.raises(InvalidParamsError) as info:
        validate_arguments(get_operation("package_show"), {"id": "x", "include_tracking": True})

    assert "include_tracking" in info.value.message


def test_non_string_keys_are_rejected_as_unknown_fields():
    with pytest.raises(InvalidParamsError) as info:
        validate_arguments(get_operation("tag_list"), {1: "x", "query": "fire", None: True})

    assert "1" in info.value.message
    assert "None" in info.value.message


def test_non_mapping_bag_is_rejected():
    with pytest.raises(InvalidParamsError):
        validate_arguments(get_operation("package_search"), ["q", "water"])


def test_to_params_skips_unset_fields_and_renders_values():
    assert PackageSearchArgs(q="soil", rows=10.0).to_params() == {"q": "soil", "rows": 10}
    assert GroupListArgs(all_fields=False, offset=3).to_params() == {"all_fields": "false", "offset": 3}
    assert PackageShowArgs(id="abc").to_params() == {"id": "abc"}
