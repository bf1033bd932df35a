import pytest

from lexer import Token, TokenKind, Tokenizer, lex


def kinds_and_text(text):
    return [(t.kind, t.text) for t in lex(text)]


def test_token_classes_in_order():
    assert kinds_and_text('{"a": 1}') == [
        (TokenKind.SYMBOL, "{"),
        (TokenKind.STRING, '"a"'),
        (TokenKind.SYMBOL, ":"),
        (TokenKind.WHITESPACE, " "),
        (TokenKind.WORD, "1"),
        (TokenKind.SYMBOL, "}"),
        (TokenKind.MALFORMED, ""),
    ]


def test_word_covers_numbers_literals_and_bare_identifiers():
    for word in ("-1.5e+3", "true", "null", "some_name", "a.b-c+d"):
        assert kinds_and_text(word)[0] == (TokenKind.WORD, word)


def test_escaped_quote_does_not_close_string():
    toks = list(lex(r'"a\"b" x'))
    assert toks[0].kind is TokenKind.STRING
    assert toks[0].text == r'"a\"b"'


def test_escaped_backslash_before_closing_quote():
    toks = list(lex(r'"a\\"'))
    assert toks[0].kind is TokenKind.STRING
    assert toks[0].text == r'"a\\"'


def test_unterminated_string_is_malformed():
    toks = list(lex('"abc'))
    assert len(toks) == 1
    assert toks[0].kind is TokenKind.MALFORMED
    assert toks[0].text == '"'


def test_invalid_character_is_one_char_malformed():
    tok = Tokenizer("@x").next()
    assert tok.kind is TokenKind.MALFORMED
    assert (tok.begin, tok.end) == (0, 1)


def test_end_of_input_is_zero_width_malformed_and_repeats():
    t = Tokenizer("")
    first = t.next()
    second = t.next()
    assert first.kind is TokenKind.MALFORMED and first.text == ""
    assert second.kind is TokenKind.MALFORMED
    assert t.at_end


def test_line_and_column_track_token_start():
    t = Tokenizer('[\n  x,\r\n\t"y"]')
    toks = [t.next_non_whitespace() for _ in range(5)]
    assert [(tok.text, tok.line, tok.column) for tok in toks] == [
        ("[", 1, 1),
        ("x", 2, 3),
        (",", 2, 4),
        ('"y"', 3, 2),
        ("]", 3, 5),
    ]


def test_next_non_whitespace_skips_runs():
    t = Tokenizer("   \n\n  a")
    tok = t.next_non_whitespace()
    assert tok.kind is TokenKind.WORD
    assert (tok.line, tok.column) == (3, 3)


def test_snapshot_leaves_cursor_in_place():
    t = Tokenizer("a b")
    ahead = t.snapshot()
    assert ahead.next_non_whitespace().text == "a"
    assert ahead.next_non_whitespace().text == "b"
    assert t.next_non_whitespace().text == "a"


def test_restore_adopts_snapshot_position():
    t = Tokenizer("a\nb c")
    ahead = t.snapshot()
    ahead.next_non_whitespace()
    ahead.next_non_whitespace()
    t.restore(ahead)
    tok = t.next_non_whitespace()
    assert (tok.text, tok.line, tok.column) == ("c", 2, 3)


def test_restore_rejects_foreign_snapshot():
    with pytest.raises(ValueError):
        Tokenizer("a").restore(Tokenizer("b"))


def test_iteration_is_restartable():
    t = Tokenizer("[1]")
    assert [tok.text for tok in t] == ["[", "1", "]", ""]
    assert [tok.text for tok in t] == ["[", "1", "]", ""]
    assert t.pos == 0


def test_input_range_limits_scanning():
    toks = list(lex("xx[1]yy", 2, 5))
    assert [tok.text for tok in toks] == ["[", "1", "]", ""]
    assert toks[0].begin == 2


def test_word_stops_at_range_end():
    tok = Tokenizer("abcdef", 0, 3).next()
    assert tok.text == "abc"


def test_invalid_range_rejected():
    with pytest.raises(ValueError):
        Tokenizer("abc", 2, 1)


def test_is_symbol_only_matches_symbol_tokens():
    tok = Tokenizer('"{"').next()
    assert tok.kind is TokenKind.STRING
    assert not tok.is_symbol("{")
    assert Tokenizer("{").next().is_symbol("{")


def test_token_is_a_tuple_over_the_source():
    source = "abc"
    tok = Tokenizer(source).next()
    assert isinstance(tok, tuple)
    assert tok.source is source
    assert tok == Token(TokenKind.WORD, source, 0, 3, 1, 1)
