import pytest

from tinyjsondom.buffer import DynamicJsonBuffer
from tinyjsondom.parser import JsonParser, skip_spaces_and_comments


def parse_array(text, limit=10):
    return JsonParser(DynamicJsonBuffer(), text, limit).parse_array()


def parse_object(text, limit=10):
    return JsonParser(DynamicJsonBuffer(), text, limit).parse_object()


def must_fail(text):
    array = parse_array(text)
    assert not array.success()
    assert len(array) == 0


def test_empty_array():
    array = parse_array("[]")
    assert array.success()
    assert len(array) == 0


@pytest.mark.parametrize(
    "text",
    [
        "]",
        "[",
        "%*$£¤",
        "[\"]",
        "['",
        "[']",
        '"\\\x00"',
        "[/COMMENT\n]",
        "[/*/\n]",
        "[/*COMMENT]",
    ],
)
def test_parse_failures(text):
    must_fail(text)


def test_empty_array_with_leading_spaces():
    array = parse_array("  []")
    assert array.success()
    assert len(array) == 0


@pytest.mark.parametrize("text", ["[42]", "[ \t\r\n42]", "[42 \t\r\n]"])
def test_one_integer(text):
    array = parse_array(text)
    assert array.success()
    assert len(array) == 1
    assert array[0].as_long() == 42


def test_two_integers():
    array = parse_array("[42,84]")
    assert len(array) == 2
    assert array[0].as_long() == 42
    assert array[1].as_long() == 84


def test_two_doubles():
    array = parse_array("[4.2,1e2]")
    assert len(array) == 2
    assert array[0].as_double() == 4.2
    assert array[1].as_double() == 1e2


def test_two_booleans():
    array = parse_array("[true,false]")
    assert len(array) == 2
    assert array[0].as_bool() is True
    assert array[1].as_bool() is False


def test_two_nulls():
    array = parse_array("[null,null]")
    assert len(array) == 2
    assert array[0].as_string() is None
    assert array[1].as_string() is None


@pytest.mark.parametrize(
    "text",
    ['[ "hello" , "world" ]', "[ 'hello' , 'world' ]", "[ hello , world ]"],
)
def test_two_strings(text):
    array = parse_array(text)
    assert array.success()
    assert len(array) == 2
    assert array[0].as_string() == "hello"
    assert array[1].as_string() == "world"


@pytest.mark.parametrize("text", ['["",""]', "['','']", "[,]"])
def test_empty_strings(text):
    array = parse_array(text)
    assert array.success()
    assert len(array) == 2
    assert array[0].as_string() == ""
    assert array[1].as_string() == ""


def test_string_with_escaped_chars():
    array = parse_array('["1\\"2\\\\3\\/4\\b5\\f6\\n7\\r8\\t9"]')
    assert len(array) == 1
    assert array[0].as_string() == '1"2\\3/4\b5\f6\n7\r8\t9'


@pytest.mark.parametrize(
    "text",
    [
        '/*COMMENT*/["hello"]',
        '[/*COMMENT*/"hello"]',
        '["hello"/*COMMENT*/]',
        '["hello"]/*COMMENT*/',
        '//COMMENT\n["hello"]',
        '[//COMMENT\n"hello"]',
        '["hello"//COMMENT\n]',
        '["hello"]//COMMENT\n',
    ],
)
def test_comments_around_single_value(text):
    array = parse_array(text)
    assert array.success()
    assert len(array) == 1
    assert array[0].as_string() == "hello"


@pytest.mark.parametrize(
    "text",
    [
        '["hello"/*COMMENT*/,"world"]',
        '["hello",/*COMMENT*/"world"]',
        '["hello"//COMMENT\n,"world"]',
        '["hello",//COMMENT\n"world"]',
    ],
)
def test_comments_around_comma(text):
    array = parse_array(text)
    assert len(array) == 2
    assert array[0].as_string() == "hello"
    assert array[1].as_string() == "world"


def test_quoted_strings_are_strings_and_bare_words_are_not():
    array = parse_array("['a', b]")
    assert array[0].is_string() is True
    assert array[1].is_string() is False


def test_nesting_limit_one_allows_one_level():
    assert parse_array("[[]]", 1).success()
    assert not parse_array("[[[]]]", 1).success()


def test_null_input_fails():
    assert not parse_array(None).success()
    assert not parse_object(None).success()


def test_parse_object_members():
    obj = parse_object("{ 'a' : 1 , b: \"two\", \"c\": [3] }")
    assert obj.success()
    assert len(obj) == 3
    assert obj["a"].as_long() == 1
    assert obj["b"].as_string() == "two"
    assert obj["c"].as_array()[0].as_long() == 3


@pytest.mark.parametrize("text", ['{"a" 1}', '{"a":1', '{"a":1 "b":2}', "[]"])
def test_parse_object_failures(text):
    obj = parse_object(text)
    assert not obj.success()
    assert len(obj) == 0


def test_skip_spaces_and_comments_positions():
    assert skip_spaces_and_comments("  x", 0) == 2
    assert skip_spaces_and_comments("/* c */ x", 0) == 8
    assert skip_spaces_and_comments("// c\nx", 0) == 5
    assert skip_spaces_and_comments("/x", 0) == 0
    assert skip_spaces_and_comments("/* open", 0) == 7


GBATHREE_JSON = (
    '{"protocol_name":"fluorescence","repeats":1,"wait":0,'
    '"averages":1,"measurements":3,"meas2_light":15,"meas1_'
    'baseline":0,"act_light":20,"pulsesize":25,"pulsedistance":'
    '10000,"actintensity1":50,"actintensity2":255,"measintensity":'
    '255,"calintensity":255,"pulses":[50,50,50],"act":[2,1,2,2],'
    '"red":[2,2,2,2],"detectors":[[34,34,34,34],[34,34,34,34],[34,'
    '34,34,34],[34,34,34,34]],"alta":[2,2,2,2],"altb":[2,2,2,2],'
    '"measlights":[[15,15,15,15],[15,15,15,15],[15,15,15,15],[15,15,'
    '15,15]],"measlights2":[[15,15,15,15],[15,15,15,15],[15,15,15,15],'
    '[15,15,15,15]],"altc":[2,2,2,2],"altd":[2,2,2,2]}'
)


@pytest.fixture
def gbathree():
    return parse_object(GBATHREE_JSON)


def test_gbathree_success(gbathree):
    assert gbathree.success()


def test_gbathree_protocol_name(gbathree):
    assert gbathree["protocol_name"].as_string() == "fluorescence"


@pytest.mark.parametrize(
    "key, expected",
    [
        ("repeats", 1),
        ("wait", 0),
        ("measurements", 3),
        ("meas2_light", 15),
        ("meas1_baseline", 0),
        ("act_light", 20),
        ("pulsesize", 25),
        ("pulsedistance", 10000),
        ("actintensity1", 50),
        ("actintensity2", 255),
        ("measintensity", 255),
        ("calintensity", 255),
    ],
)
def test_gbathree_scalars(gbathree, key, expected):
    assert gbathree[key].as_long() == expected


@pytest.mark.parametrize(
    "key, expected",
    [
        ("pulses", [50, 50, 50]),
        ("act", [2, 1, 2, 2]),
        ("alta", [2, 2, 2, 2]),
        ("altb", [2, 2, 2, 2]),
        ("altc", [2, 2, 2, 2]),
        ("altd", [2, 2, 2, 2]),
    ],
)
def test_gbathree_flat_arrays(gbathree, key, expected):
    array = gbathree[key].as_array()
    assert array.success()
    assert [value.as_long() for value in array] == expected


@pytest.mark.parametrize(
    "key, expected", [("detectors", 34), ("measlights", 15), ("measlights2", 15)]
)
def test_gbathree_nested_arrays(gbathree, key, expected):
    array = gbathree[key].as_array()
    assert array.success()
    assert len(array) == 4
    for row in array:
        nested = row.as_array()
        assert [value.as_long() for value in nested] == [expected] * 4