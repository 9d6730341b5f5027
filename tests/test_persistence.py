import pytest

from sankey_format.persistence import (
    NodePosition,
    ViewportSize,
    decode_node_positions,
    decode_viewport_size,
    encode_node_positions,
    encode_viewport_size,
)


def test_node_positions_round_trip():
    positions = [NodePosition(node_id="A", x=10, y=20.5), NodePosition(node_id="B", x=-3.25, y=0)]
    assert decode_node_positions(encode_node_positions(positions)) == positions


def test_node_positions_are_encoded_with_node_id_key():
    text = encode_node_positions([NodePosition(node_id="A", x=1, y=2)])
    assert '"nodeId":"A"' in text


def test_empty_positions_round_trip():
    assert encode_node_positions([]) == "[]"
    assert decode_node_positions("[]") == []


@pytest.mark.parametrize("text", ["", "   ", None, "not json", "{}", '[{"x": 1}]', "null"])
def test_malformed_positions_decode_to_empty(text):
    assert decode_node_positions(text) == []


def test_legacy_name_key_is_accepted():
    decoded = decode_node_positions('[{"name": "A", "x": "12.5", "y": 3}]')
    assert decoded == [NodePosition(node_id="A", x=12.5, y=3)]


def test_viewport_size_round_trip():
    size = ViewportSize(width="640", height="480")
    assert decode_viewport_size(encode_viewport_size(size)) == size


def test_partial_viewport_size_round_trip():
    size = ViewportSize(width="640")
    text = encode_viewport_size(size)
    assert text == '{"width":"640"}'
    assert decode_viewport_size(text) == size


def test_numeric_viewport_values_are_stored_as_text():
    assert decode_viewport_size('{"width": 640, "height": 480.5}') == ViewportSize(width="640", height="480.5")


@pytest.mark.parametrize("text", ["", None, "not json", "[1, 2]"])
def test_malformed_viewport_size_decodes_to_default(text):
    assert decode_viewport_size(text) == ViewportSize()
