import logging

import pytest

from msgtable.builder import build_dictionary
from msgtable.converters import cp1251_or_bytes
from msgtable.dictionary import MsgDictionary, MsgLine
from msgtable.errors import MalformedEntryError, MsgError, MsgIoError, ParseError
from msgtable.lexer import tokenize
from msgtable.loader import parse, parse_cp1251_file, parse_file, parse_with
from msgtable.records import Entry


def test_basic():
    d = parse(b"{10}{}{Global map}\n{15}{}{20car}\n{15}{}{23world}")
    assert list(d) == [(10, 0), (15, 0), (15, 1)]
    assert d.get_first_string(10) == "Global map"
    assert list(d.get_all_strings(15)) == [(0, "20car"), (1, "23world")]


def test_comment_skip():
    d = parse(b"# header\n{1}{}{Test}")
    assert len(d) == 1
    assert list(d.iter_first_strings()) == [(1, "Test")]


def test_comments_and_blanks_do_not_shift_sub_indices():
    plain = parse(b"{5}{}{a}\n{5}{}{b}\n{5}{}{c}")
    noisy = parse(b"{5}{}{a}\n\n# x\n  \n{5}{}{b}\n// y\n{5}{}{c}\n")
    assert plain == noisy
    assert list(noisy.get_all_strings(5)) == [(0, "a"), (1, "b"), (2, "c")]


def test_parsing_twice_gives_equal_dictionaries():
    data = b"{2}{}{x}\n{1}{}{y}\n{2}{}{z}"
    assert parse(data) == parse(data)


@pytest.mark.parametrize("data", [b"", b"\n\n", b"# only\n// comments\n   \n"])
def test_empty_documents(data):
    assert len(parse(data)) == 0


def test_max_index_and_multiline_value():
    d = parse(b"{4294967295}{}{first\r\nsecond\n}")
    assert d.get_first_string(4294967295) == "first\r\nsecond\n"


def test_invalid_utf8_kept_as_bytes():
    d = parse(b"{7}{}{ok}\n{8}{}{\xff\xfeabc}")
    assert d.get_first_string(8) is None
    assert d.get_first_bytes(8) == b"\xff\xfeabc"
    assert list(d.iter_first_strings()) == [(7, "ok")]


def test_text_input():
    d = parse("{1}{}{Привет}")
    assert d.get_first_string(1) == "Привет"


def test_exhaustive_flag():
    with pytest.raises(ParseError, match="trailing garbage"):
        parse(b"{1}{}{ok} trailing garbage")
    d = parse(b"{1}{}{ok} trailing garbage", exhaustive=False)
    assert d.get_first_string(1) == "ok"


def test_malformed_secondary_fails_the_parse():
    with pytest.raises(MalformedEntryError) as info:
        parse(b"{1}{}{a}\n{2}{key}{b}")
    assert info.value.entry == Entry(2, b"key", b"b")
    assert "{2}{key}{b}" in str(info.value)
    assert isinstance(info.value, MsgError)


def test_malformed_secondary_can_be_skipped(caplog):
    with caplog.at_level(logging.WARNING, logger="msgtable.builder"):
        d = parse(b"{1}{}{a}\n{1}{key}{b}\n{1}{}{c}", skip_malformed=True)
    assert list(d.get_all_strings(1)) == [(0, "a"), (1, "c")]
    assert "non-empty secondary" in caplog.text


def test_build_dictionary_with_converter():
    doc = tokenize("{1}{}{Привет}".encode("cp1251"))
    d = build_dictionary(doc, cp1251_or_bytes)
    assert isinstance(d, MsgDictionary)
    assert d.get_first_string(1) == "Привет"


def test_parse_with_custom_converter():
    seen = []

    def converter(raw):
        seen.append(raw)
        return cp1251_or_bytes(raw)

    parse_with(b"{1}{}{a}\n{2}{}{b}", converter)
    assert seen == [b"a", b"b"]


def test_parse_file(tmp_path):
    path = tmp_path / "GAME.MSG"
    path.write_bytes(b"# names\n{100}{}{Vault}\n")
    assert parse_file(path).get_first_string(100) == "Vault"
    assert parse_file(str(path)).get_first_string(100) == "Vault"


def test_parse_cp1251_file(tmp_path):
    path = tmp_path / "RUSS.MSG"
    path.write_bytes("{1}{}{Убежище}\r\n".encode("cp1251") + b"{2}{}{x\x98}")
    d = parse_cp1251_file(path)
    assert d.get_first_string(1) == "Убежище"
    assert d.get_first_string(2) is None
    assert d.get_first_bytes(2) == b"x\x98"


def test_parse_file_passes_options(tmp_path):
    path = tmp_path / "TAIL.MSG"
    path.write_bytes(b"{1}{}{ok} junk")
    assert parse_file(path, exhaustive=False).get_first_string(1) == "ok"


def test_missing_file(tmp_path):
    with pytest.raises(MsgIoError, match="cannot read"):
        parse_file(tmp_path / "missing.MSG")


def test_converter_returning_bytes_as_text_is_rejected():
    with pytest.raises(TypeError):
        parse_with(b"{1}{}{abc}", lambda raw: MsgLine.as_text(raw))


def test_very_long_index_is_a_parse_error():
    with pytest.raises(ParseError, match="does not fit in 32 bits"):
        parse(b"{" + b"9" * 5000 + b"}{}{x}")
