import pytest

from pg_neptune.errors import DuplicatePropertyValueError, MultiValuedPropertyError
from pg_neptune.schema import DataType, PropertyHeader
from pg_neptune.transcode import (
    MultiValuedNodePropertyPolicy,
    MultiValuedRelationshipPropertyPolicy,
    PropertyValueParser,
    split_list_cell,
)

NODE = MultiValuedNodePropertyPolicy
REL = MultiValuedRelationshipPropertyPolicy


def test_split_list_cell():
    assert split_list_cell('["a","b"]') == ["a", "b"]
    assert split_list_cell("[1,2.5,true]") == ["1", "2.5", "true"]
    assert split_list_cell('["a",null,"b"]') == ["a", "b"]
    assert split_list_cell("[]") == []
    assert split_list_cell("John") is None
    assert split_list_cell("[not json]") is None
    assert split_list_cell("") is None


def test_scalar_without_inference_is_string():
    parser = PropertyValueParser()
    value = parser.parse("30")

    assert value.data_type is DataType.STRING
    assert value.value == '"30"'
    assert not value.is_multi_valued


def test_empty_and_null_cells_are_neutral():
    parser = PropertyValueParser(infer_types=True)
    for raw in ("", "null", None):
        value = parser.parse(raw)
        assert value.data_type is DataType.NONE
        assert value.value == ""


def test_scalar_with_inference():
    parser = PropertyValueParser(infer_types=True)

    assert parser.parse("30").value == "30"
    assert parser.parse("30").data_type is DataType.INTEGER
    assert parser.parse("2.5").data_type is DataType.FLOAT
    assert parser.parse("true").data_type is DataType.BOOLEAN
    assert parser.parse("2020-01-01").data_type is DataType.DATE
    assert parser.parse("Jane").value == '"Jane"'


def test_put_in_set_ignoring_duplicates():
    parser = PropertyValueParser(NODE.PUT_IN_SET_IGNORING_DUPLICATES)
    value = parser.parse('["chess","go","chess"]')

    assert value.is_multi_valued
    assert value.data_type is DataType.STRING
    assert value.value == '"chess;go"'


def test_put_in_set_widens_element_types():
    parser = PropertyValueParser(NODE.PUT_IN_SET_IGNORING_DUPLICATES, infer_types=True)
    value = parser.parse("[1,2.5]")

    assert value.data_type is DataType.FLOAT
    assert value.value == "1;2.5"


def test_put_in_set_escapes_separator_in_elements():
    parser = PropertyValueParser(NODE.PUT_IN_SET_IGNORING_DUPLICATES)
    assert parser.parse('["a;b","c"]').value == '"a\\;b;c"'


def test_single_element_list_is_scalar():
    parser = PropertyValueParser(NODE.PUT_IN_SET_IGNORING_DUPLICATES, infer_types=True)
    value = parser.parse("[7]")

    assert not value.is_multi_valued
    assert value.data_type is DataType.INTEGER
    assert value.value == "7"


def test_duplicates_collapsing_to_one_value_is_scalar():
    parser = PropertyValueParser(NODE.PUT_IN_SET_IGNORING_DUPLICATES)
    value = parser.parse('["x","x"]')

    assert not value.is_multi_valued
    assert value.value == '"x"'


def test_empty_list_is_neutral():
    parser = PropertyValueParser(NODE.PUT_IN_SET_IGNORING_DUPLICATES)
    value = parser.parse("[]")

    assert value.data_type is DataType.NONE
    assert value.value == ""


def test_put_in_set_but_halt_if_duplicates():
    parser = PropertyValueParser(NODE.PUT_IN_SET_BUT_HALT_IF_DUPLICATES)

    assert parser.parse('["a","b"]').value == '"a;b"'
    with pytest.raises(DuplicatePropertyValueError) as excinfo:
        parser.parse('["a","b","a"]')
    assert excinfo.value.value == '["a","b","a"]'


def test_halt_rejects_multiple_values():
    parser = PropertyValueParser(NODE.HALT)

    with pytest.raises(MultiValuedPropertyError) as excinfo:
        parser.parse('["a","b"]')
    assert excinfo.value.policy is NODE.HALT
    assert "multi-valued property found" in str(excinfo.value)


def test_halt_accepts_single_element_list():
    parser = PropertyValueParser(REL.HALT)
    value = parser.parse('["a"]')

    assert not value.is_multi_valued
    assert value.value == '"a"'


def test_leave_as_string_replaces_separator():
    parser = PropertyValueParser(REL.LEAVE_AS_STRING, semicolon_replacement="_")
    value = parser.parse('["x;y","z"]')

    assert value.data_type is DataType.STRING
    assert not value.is_multi_valued
    assert value.value == '"[""x_y"",""z""]"'


def test_leave_as_string_ignores_inference():
    parser = PropertyValueParser(NODE.LEAVE_AS_STRING, infer_types=True)
    assert parser.parse("[1,2]").data_type is DataType.STRING


def test_replacement_containing_separator_is_rejected():
    with pytest.raises(ValueError):
        PropertyValueParser(NODE.LEAVE_AS_STRING, semicolon_replacement="a;b")


def test_custom_separator():
    parser = PropertyValueParser(NODE.PUT_IN_SET_IGNORING_DUPLICATES, multi_value_separator="|")
    assert parser.parse('["A|B","Y"]').value == '"A\\|B|Y"'


def test_set_policy_escapes_separator_in_every_value_of_a_column():
    parser = PropertyValueParser(NODE.PUT_IN_SET_IGNORING_DUPLICATES)
    header = PropertyHeader("tags")

    rendered = []
    for raw in ['["a","b"]', '["x;y"]', '["x;y","x;y"]', "p;q"]:
        value = parser.parse(raw)
        header.observe(value)
        rendered.append(value.value)

    assert header.heading == "tags:String[]"
    assert rendered == ['"a;b"', '"x\\;y"', '"x\\;y"', '"p\\;q"']


def test_halt_if_duplicates_escapes_scalar_values():
    parser = PropertyValueParser(NODE.PUT_IN_SET_BUT_HALT_IF_DUPLICATES)
    assert parser.parse("p;q").value == '"p\\;q"'


def test_single_valued_policies_keep_scalars_verbatim():
    assert PropertyValueParser(NODE.HALT).parse("p;q").value == '"p;q"'
    assert PropertyValueParser(REL.LEAVE_AS_STRING).parse("p;q").value == '"p;q"'
