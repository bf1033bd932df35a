import pytest

from json_escape import UnescapeError, escape, unescape


def test_escape_wraps_and_escapes_quote_and_backslash():
    assert escape('a"b\\c') == '"a\\"b\\\\c"'


def test_escape_empty():
    assert escape("") == '""'


def test_escape_leaves_control_characters_raw():
    assert escape("a\nb\t") == '"a\nb\t"'


@pytest.mark.parametrize("text", ["", "plain", '"', "\\", 'say "hi"', "C:\\dir\\", "\\\"\\", "line\nbreak"])
def test_unescape_inverts_escape(text):
    assert unescape(escape(text)) == text


def test_unescape_has_no_sequence_table():
    assert unescape('"a\\nb"') == "anb"
    assert unescape('"\\u0041"') == "u0041"


@pytest.mark.parametrize("raw", ["", '"', "abc", '"abc', 'abc"'])
def test_unescape_rejects_missing_quotes(raw):
    with pytest.raises(UnescapeError):
        unescape(raw)


def test_unescape_rejects_dangling_escape():
    with pytest.raises(UnescapeError) as ei:
        unescape('"ab\\"')
    assert "trailing backslash" in str(ei.value)


def test_unescape_error_is_a_value_error():
    with pytest.raises(ValueError):
        unescape("x")
