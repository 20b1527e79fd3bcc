import pytest

from bdecode.decoder import BencodeDecoder, decode, decode_one
from bdecode.errors import (
    BencodeDecodeError,
    ExpectedStringKey,
    MalformedInteger,
    MalformedString,
    OutOfBounds,
    TrailingData,
    UnexpectedToken,
    UnterminatedAggregate,
)
from bdecode.structure import BencodeDict, BencodeInt, BencodeList, BencodeString


def test_int():
    (obj,) = decode(b"i42e")
    assert isinstance(obj, BencodeInt)
    assert obj.value == 42


def test_string():
    (obj,) = decode(b"4:spam")
    assert isinstance(obj, BencodeString)
    assert obj.value == b"spam"


def test_empty_string():
    assert decode(b"0:") == [BencodeString(b"")]


def test_list():
    (obj,) = decode(b"l4:spam4:eggse")
    assert isinstance(obj, BencodeList)
    assert obj == BencodeList([BencodeString(b"spam"), BencodeString(b"eggs")])


def test_dict():
    (obj,) = decode(b"d3:cow3:moo4:spam4:eggse")
    assert isinstance(obj, BencodeDict)
    assert obj.value == {
        b"cow": BencodeString(b"moo"),
        b"spam": BencodeString(b"eggs"),
    }


def test_nested_list_in_dict():
    (obj,) = decode(b"d4:listl1:a1:bee")
    assert obj[b"list"] == BencodeList([BencodeString(b"a"), BencodeString(b"b")])


def test_empty_aggregates():
    assert decode(b"lede") == [BencodeList([]), BencodeDict({})]


def test_deep_nesting():
    (obj,) = decode(b"lld1:xli1eeeee")
    assert obj.to_python() == [[{b"x": [1]}]]


def test_duplicate_keys_last_write_wins():
    (obj,) = decode(b"d1:ai1e1:ai2ee")
    assert len(obj) == 1
    assert obj[b"a"] == BencodeInt(2)


def test_dict_keeps_first_seen_key_order():
    (obj,) = decode(b"d1:bi1e1:ai2e1:bi3ee")
    assert list(obj.value) == [b"b", b"a"]
    assert obj.to_python() == {b"b": 3, b"a": 2}


def test_multiple_top_level_values():
    values = decode(b"i1e3:abcle")
    assert values == [BencodeInt(1), BencodeString(b"abc"), BencodeList([])]


def test_empty_input():
    assert decode(b"") == []


def test_redecode_gives_equal_trees():
    data = b"d4:infod6:lengthi10e4:name3:fooe4:listli1ei2eee"
    assert decode(data) == decode(data)


def test_binary_payload_untouched():
    payload = bytes(range(256))
    (obj,) = decode(b"256:" + payload)
    assert obj.value == payload


def test_string_payload_may_contain_markers():
    (obj,) = decode(b"l5:ie:d:ee")
    assert obj == BencodeList([BencodeString(b"ie:d:")])


def test_accepts_bytearray_memoryview_and_str():
    expected = [BencodeString(b"spam")]
    assert decode(bytearray(b"4:spam")) == expected
    assert decode(memoryview(b"4:spam")) == expected
    assert decode("4:spam") == expected


def test_str_lengths_count_utf8_bytes():
    (obj,) = decode("2:é")
    assert obj.value == "é".encode("utf-8")


def test_rejects_unsupported_input_type():
    with pytest.raises(TypeError):
        decode(42)


def test_leading_zeros_accepted():
    assert decode(b"i007e02:ab") == [BencodeInt(7), BencodeString(b"ab")]


def test_int64_bounds():
    assert decode(b"i9223372036854775807e") == [BencodeInt(2**63 - 1)]
    with pytest.raises(MalformedInteger):
        decode(b"i9223372036854775808e")


def test_very_long_integer_rejected():
    with pytest.raises(MalformedInteger):
        decode(b"i" + b"9" * 5000 + b"e")


def test_negative_integer_rejected_by_default():
    with pytest.raises(MalformedInteger):
        decode(b"i-3e")


@pytest.mark.parametrize(
    "data, error",
    [
        (b"x", UnexpectedToken),
        (b"e", UnexpectedToken),
        (b"i1ee", UnexpectedToken),
        (b"d1:ae", UnexpectedToken),
        (b"di1e1:ae", ExpectedStringKey),
        (b"dle", ExpectedStringKey),
        (b"ie", MalformedInteger),
        (b"i4xe", MalformedInteger),
        (b"i", OutOfBounds),
        (b"i42", OutOfBounds),
        (b"4", OutOfBounds),
        (b"4spam", MalformedString),
        (b"5:abc", MalformedString),
        (b"l1:", MalformedString),
        (b"l1:a", UnterminatedAggregate),
        (b"l", UnterminatedAggregate),
        (b"d", UnterminatedAggregate),
        (b"d1:a", UnterminatedAggregate),
        (b"d1:ai1e", UnterminatedAggregate),
        (b"lli1ee", UnterminatedAggregate),
    ],
)
def test_malformed_input(data, error):
    with pytest.raises(error):
        decode(data)


def test_errors_are_value_errors_with_position():
    with pytest.raises(BencodeDecodeError) as excinfo:
        decode(b"l4:spamx")
    assert isinstance(excinfo.value, ValueError)
    assert isinstance(excinfo.value, UnexpectedToken)
    assert excinfo.value.position == 7
    assert "index 7" in str(excinfo.value)


def test_truncated_string_never_returns_short_payload():
    with pytest.raises(MalformedString) as excinfo:
        decode(b"5:abc")
    assert excinfo.value.position == 0


def test_huge_declared_length_rejected():
    with pytest.raises(MalformedString):
        decode(b"99999999999999999999999:abc")


def test_error_in_later_value_returns_nothing():
    with pytest.raises(UnexpectedToken):
        decode(b"i1e4:spamx")


def test_decode_one():
    assert decode_one(b"d3:cowi1ee") == BencodeDict({b"cow": BencodeInt(1)})


def test_decode_one_trailing_data():
    with pytest.raises(TrailingData) as excinfo:
        decode_one(b"i1ei2e")
    assert excinfo.value.position == 3


def test_decode_one_empty_input():
    with pytest.raises(OutOfBounds):
        decode_one(b"")


def test_decoder_cursor_advances_exactly():
    decoder = BencodeDecoder(b"4:spami3e")
    assert decoder.decode_value() == BencodeString(b"spam")
    assert decoder.position == 6
    assert decoder.decode_value() == BencodeInt(3)
    assert decoder.position == 9


@pytest.mark.parametrize("data", [b"lxi1e", b"ld1:al", b"dl"])
def test_depth_restored_after_failed_value(data):
    decoder = BencodeDecoder(data)
    with pytest.raises(BencodeDecodeError):
        decoder.decode_value()
    assert decoder.depth == 0
