import pytest

from attolisp.reader.tokenizer import Token, TokenType, tokenize


def _kinds(source):
    return [(t.type, t.value) for t in tokenize(source)]


EOF = (TokenType.END_OF_INPUT, "")


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2)", [
            (TokenType.LEFT_PAREN, "("),
            (TokenType.SYMBOL, "+"),
            (TokenType.NUMBER, "1"),
            (TokenType.NUMBER, "2"),
            (TokenType.RIGHT_PAREN, ")"),
            EOF,
        ]),
        ("-5", [(TokenType.NUMBER, "-5"), EOF]),
        ("-", [(TokenType.SYMBOL, "-"), EOF]),
        ("- 5", [(TokenType.SYMBOL, "-"), (TokenType.NUMBER, "5"), EOF]),
        ("3.14", [(TokenType.NUMBER, "3.14"), EOF]),
        ("1.2.3", [(TokenType.NUMBER, "1.2"), (TokenType.SYMBOL, ".3"), EOF]),
        ("<= >= empty?", [
            (TokenType.SYMBOL, "<="),
            (TokenType.SYMBOL, ">="),
            (TokenType.SYMBOL, "empty?"),
            EOF,
        ]),
        ("'x", [(TokenType.QUOTE_MARK, "'"), (TokenType.SYMBOL, "x"), EOF]),
        ('#d"2024-01-15"', [(TokenType.DATE_LITERAL, "2024-01-15"), EOF]),
        ("#debug", [(TokenType.SYMBOL, "#debug"), EOF]),
        ("abc;comment", [(TokenType.SYMBOL, "abc"), EOF]),
        ("; just a comment\nfoo", [(TokenType.SYMBOL, "foo"), EOF]),
        ("", [EOF]),
        ("   \n\t  ; trailing comment", [EOF]),
    ],
)
def test_token_kinds(source, expected):
    assert _kinds(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ('"hello"', "hello"),
        ('"a\\nb"', "a\nb"),
        ('"tab\\there"', "tab\there"),
        ('"cr\\r"', "cr\r"),
        ('"quote \\" inside"', 'quote " inside'),
        ('"back\\\\slash"', "back\\slash"),
        ('"\\q"', "q"),
        ('"(not a list)"', "(not a list)"),
    ],
)
def test_string_escapes(source, expected):
    tokens = tokenize(source)
    assert tokens[0].type is TokenType.STRING
    assert tokens[0].value == expected


def test_unterminated_string_runs_to_end_of_input():
    tokens = tokenize('"abc (def')
    assert [(t.type, t.value) for t in tokens] == [(TokenType.STRING, "abc (def"), EOF]


def test_positions_track_lines_and_columns():
    tokens = tokenize("(a\n  b)")
    assert [(t.value, t.position, t.line, t.column) for t in tokens] == [
        ("(", 0, 1, 1),
        ("a", 1, 1, 2),
        ("b", 5, 2, 3),
        (")", 6, 2, 4),
        ("", 7, 2, 5),
    ]


def test_token_records_start_of_multiline_string():
    tokens = tokenize('"one\ntwo" x')
    assert tokens[0].line == 1 and tokens[0].column == 1
    assert tokens[1] == Token(TokenType.SYMBOL, "x", 10, 2, 6)


def test_positions_are_utf8_byte_offsets():
    tokens = tokenize('("é€" x 🙂)')
    assert [(t.value, t.position, t.column) for t in tokens] == [
        ("(", 0, 1),
        ("é€", 1, 2),
        ("x", 9, 7),
        ("🙂", 11, 9),
        (")", 15, 10),
        ("", 16, 11),
    ]


def test_always_ends_with_end_of_input():
    for source in ["", "(", ")", "x", '"open']:
        assert tokenize(source)[-1].type is TokenType.END_OF_INPUT
