import math

import pytest

from arithcode.coding import (
    ArithmeticCoder,
    EncodedMessage,
    Interval,
    compute_codelength,
    decode,
    decode_text,
    encode,
    encode_with_model,
    iter_intervals,
    max_safe_symbol_count,
    verify_roundtrip,
)
from arithcode.errors import InvalidInput, NoMatchingSymbol, UnknownSymbol
from arithcode.models import build_probability_table


@pytest.fixture
def sample_text() -> str:
    return "hello world"


def test_aab_scenario():
    table = build_probability_table("AAB")
    value = encode("AAB", table)
    assert 0.0 < value < 1.0
    assert decode(value, table, 3) == ["A", "A", "B"]
    assert decode_text(value, table, 3) == "AAB"


@pytest.mark.parametrize(
    "sequence",
    [
        "AAB",
        "ABCD",
        "hello world",
        "abracadabra",
        "mississippi",
        "zzzzzzzzzy",
        [3, 1, 4, 1, 5, 9, 2, 6],
    ],
)
def test_roundtrip(sequence):
    table = build_probability_table(sequence)
    value = encode(sequence, table)
    assert decode(value, table, len(sequence)) == list(sequence)


def test_roundtrip_without_snapping():
    table = build_probability_table("abracadabra")
    value = encode("abracadabra", table, snap_last=False)
    assert decode_text(value, table, 11, snap_last=False) == "abracadabra"


def test_single_symbol_alphabet_is_stable():
    """Probability 1.0 never narrows the interval, so the value stays at 0.5."""

    table = build_probability_table("AAAA")
    assert encode("AAAA", table) == 0.5
    assert encode("A" * 500, table) == 0.5
    assert decode_text(0.5, table, 4) == "AAAA"


def test_empty_sequence_encodes_to_midpoint():
    assert encode("", {"A": 1.0}) == 0.5
    assert decode(0.5, {"A": 1.0}, 0) == []


def test_monotonic_narrowing(sample_text: str):
    table = build_probability_table(sample_text)
    previous = Interval.unit()
    steps = list(iter_intervals(sample_text, table))
    assert len(steps) == len(sample_text)
    for interval in steps:
        assert previous.contains_interval(interval)
        assert interval.width < previous.width
        previous = interval


def test_encoded_value_inside_final_interval(sample_text: str):
    table = build_probability_table(sample_text)
    final = list(iter_intervals(sample_text, table))[-1]
    assert final.contains(encode(sample_text, table))


def test_unknown_symbol_error():
    with pytest.raises(UnknownSymbol) as excinfo:
        encode(["Z"], {"A": 1.0})
    assert excinfo.value.symbol == "Z"
    assert excinfo.value.position == 0
    assert isinstance(excinfo.value, KeyError)


def test_unknown_symbol_position():
    with pytest.raises(UnknownSymbol) as excinfo:
        encode("ABX", {"A": 0.5, "B": 0.5})
    assert excinfo.value.position == 2
    assert "'X'" in str(excinfo.value)


def test_decode_boundary_value_has_no_match():
    """A value sitting exactly on a partition boundary matches nothing."""

    table = build_probability_table("ABCD")
    with pytest.raises(NoMatchingSymbol) as excinfo:
        decode(0.25, table, 1)
    assert excinfo.value.step == 0
    assert decode(0.25, table, 1, strict=False) == ["B"]


@pytest.mark.parametrize("value", [1.5, -0.1, 1.0, 0.0, float("nan")])
def test_decode_value_outside_code_space(value):
    with pytest.raises(NoMatchingSymbol):
        decode(value, {"A": 0.5, "B": 0.5}, 2)


def test_decode_rejects_bad_count():
    with pytest.raises(InvalidInput):
        decode(0.5, {"A": 1.0}, -1)
    with pytest.raises(InvalidInput):
        decode(0.5, {"A": 1.0}, 2.0)  # type: ignore[arg-type]


def test_decode_rejects_non_numeric_value():
    with pytest.raises(InvalidInput):
        decode("half", {"A": 1.0}, 1)  # type: ignore[arg-type]


def test_decode_with_short_count_returns_prefix():
    table = build_probability_table("AAB")
    value = encode("AAB", table)
    assert decode_text(value, table, 2) == "AA"


def test_decode_depends_on_table_order():
    forward = {"A": 0.25, "B": 0.75}
    value = encode("A", forward)
    assert decode(value, forward, 1) == ["A"]
    assert decode(value, {"B": 0.75, "A": 0.25}, 1) == ["B"]


def test_compute_codelength():
    table = build_probability_table("ABCD")
    assert compute_codelength("ABCD", table) == pytest.approx(8.0)
    with pytest.raises(InvalidInput):
        compute_codelength("", table)
    with pytest.raises(UnknownSymbol):
        compute_codelength("E", table)


def test_codelength_matches_entropy(sample_text: str):
    table = build_probability_table(sample_text)
    bits = compute_codelength(sample_text, table)
    assert bits / len(sample_text) == pytest.approx(table.entropy(), rel=1e-9)


def test_max_safe_symbol_count():
    uniform = build_probability_table("ABCD")
    assert max_safe_symbol_count(uniform) == 26
    assert max_safe_symbol_count(uniform, precision_bits=8) == 4
    assert max_safe_symbol_count({"A": 1.0}) is None
    skewed = build_probability_table("a" * 1023 + "b")
    assert max_safe_symbol_count(skewed) == math.floor(52 / 10)


def test_verify_roundtrip(sample_text: str):
    res = verify_roundtrip(sample_text)
    assert res["matches"] is True
    assert res["within_precision"] is True
    assert res["symbol_count"] == len(sample_text)
    assert 0.0 < res["encoded_value"] < 1.0
    assert res["codelength_bits"] > 0


def test_verify_roundtrip_flags_precision_budget():
    res = verify_roundtrip("ab" * 60)
    assert res["max_safe_symbols"] == 52
    assert res["within_precision"] is False


def test_encode_with_model(sample_text: str):
    message = encode_with_model(sample_text)
    assert isinstance(message, EncodedMessage)
    assert message.symbol_count == len(sample_text)
    assert list(message.probabilities) == list(dict.fromkeys(sample_text))
    assert ArithmeticCoder().decode_message(message) == list(sample_text)


def test_encoded_message_dict_roundtrip():
    message = encode_with_model("AAB")
    restored = EncodedMessage.from_dict(message.to_dict())
    assert restored == message


def test_encoded_message_missing_keys():
    with pytest.raises(InvalidInput):
        EncodedMessage.from_dict({"encoded_value": 0.5})
    with pytest.raises(InvalidInput):
        EncodedMessage.from_dict({"encoded_value": "x", "symbol_count": 1, "probabilities": [["A", 1.0]]})


def test_coder_options():
    coder = ArithmeticCoder(strict=False)
    table = coder.fit("ABCD")
    assert coder.decode(0.25, table, 1) == ["B"]
    assert coder.decode(coder.encode("DCBA", table), table, 4) == list("DCBA")
