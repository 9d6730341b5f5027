import pytest

from sankey_format.entities import NodeLabel, SankeyLink, SankeyNode, SelectionId
from sankey_format.link_colors import (
    LinkColorMode,
    LinkColorModeError,
    LinkMatchTarget,
    link_label,
    resolve_link_colors,
)
from sankey_format.settings import LinkColorSettings


def _node(name, color):
    return SankeyNode(id=name, label=NodeLabel(name), fill_color=color, selection_id=SelectionId(f"n-{name}"))


def _link(source, destination, color=None, key=None):
    return SankeyLink(
        source=source,
        destination=destination,
        fill_color=color,
        selection_id=SelectionId(key or f"l-{source.id}-{destination.id}"),
    )


@pytest.fixture()
def card():
    return LinkColorSettings()


@pytest.fixture()
def links():
    a, b, c = _node("A", "red"), _node("B", "blue"), _node("C", "green")
    return [_link(a, b, "#111111"), _link(b, c, "#222222")]


def _exclusive_states(card):
    target_visible = card.match_source_or_destination.visible
    individual = [s for s in card.dynamic_slices() if not s.selector.is_wildcard]
    uniform = [s for s in card.dynamic_slices() if s.selector.is_wildcard]
    return [target_visible, bool(individual), len(uniform) == 1]


def test_default_mode_matches_source_colors(card, links):
    assert card.mode is LinkColorMode.MATCH_NODE_COLORS
    resolve_link_colors(card, links)
    assert [link.fill_color for link in links] == ["red", "blue"]
    assert card.slices == card.base_slices()
    assert card.match_source_or_destination.visible is True
    assert card.set_individual_colors.visible is False


def test_match_destination_colors():
    link = _link(_node("A", "red"), _node("B", "blue"))
    card = LinkColorSettings()
    resolve_link_colors(card, [link], mode=LinkColorMode.MATCH_NODE_COLORS, match_target=LinkMatchTarget.DESTINATION)
    assert link.fill_color == "blue"
    resolve_link_colors(card, [link], match_target=LinkMatchTarget.SOURCE)
    assert link.fill_color == "red"


def test_match_mode_keeps_prior_color_when_node_color_missing(card):
    link = _link(_node("A", None), _node("B", "blue"), color="#abcdef")
    orphan = SankeyLink(source=None, destination=_node("B", "blue"), fill_color="#fedcba")
    resolve_link_colors(card, [link, orphan])
    assert link.fill_color == "#abcdef"
    assert orphan.fill_color == "#fedcba"


def test_individual_mode_generates_one_slice_per_link(card, links):
    resolve_link_colors(card, links, mode=LinkColorMode.INDIVIDUAL_COLORS)
    generated = card.dynamic_slices()
    assert [s.display_name for s in generated] == ["A - B", "B - C"]
    assert [s.value for s in generated] == ["#111111", "#222222"]
    assert [s.selector.key for s in generated] == ["l-A-B", "l-B-C"]
    assert [link.fill_color for link in links] == ["#111111", "#222222"]
    assert card.match_source_or_destination.visible is False
    assert card.set_individual_colors.visible is True


def test_individual_mode_rebuilds_instead_of_appending(card, links):
    resolve_link_colors(card, links, mode=LinkColorMode.INDIVIDUAL_COLORS)
    fewer = [_link(_node("X", "red"), _node("Y", "blue"), "#333333")]
    resolve_link_colors(card, fewer)
    assert len(card.dynamic_slices()) == len(fewer)
    assert card.dynamic_slices()[0].display_name == "X - Y"


def test_uniform_mode_uses_first_link_color(card, links):
    resolve_link_colors(card, links, mode=LinkColorMode.UNIFORM)
    generated = card.dynamic_slices()
    assert len(generated) == 1
    assert generated[0].value == "#111111"
    assert generated[0].selector.is_wildcard
    assert generated[0].instance_kind == "ConstantOrRule"
    assert generated[0].display_name_key == "Visual_LinkColor"


def test_uniform_mode_without_links_uses_fallback(card):
    resolve_link_colors(card, [], mode=LinkColorMode.UNIFORM)
    assert card.dynamic_slices()[0].value == "#000000"
    resolve_link_colors(card, None, uniform_color="#ff00ff")
    assert card.dynamic_slices()[0].value == "#ff00ff"


def test_uniform_fallback_comes_from_config(card, monkeypatch):
    from sankey_format.utils.config import settings

    monkeypatch.setattr(settings, "fallback_link_color", "#0000ff")
    resolve_link_colors(card, [], mode=LinkColorMode.UNIFORM)
    assert card.dynamic_slices()[0].value == "#0000ff"


@pytest.mark.parametrize(
    "mode",
    [LinkColorMode.MATCH_NODE_COLORS, LinkColorMode.INDIVIDUAL_COLORS, LinkColorMode.UNIFORM],
)
def test_modes_are_mutually_exclusive(card, links, mode):
    # Start from a different mode so leftovers would show up.
    resolve_link_colors(card, links, mode=LinkColorMode.INDIVIDUAL_COLORS)
    resolve_link_colors(card, links, mode=mode)
    assert sum(_exclusive_states(card)) == 1


def test_match_toggle_takes_priority_over_individual(card, links):
    card.set_individual_colors.set_value(True)
    card.match_node_colors.set_value(True)
    assert resolve_link_colors(card, links) is LinkColorMode.MATCH_NODE_COLORS
    assert card.dynamic_slices() == []


def test_individual_toggle_visible_again_after_leaving_match_mode(card, links):
    resolve_link_colors(card, links)
    assert card.set_individual_colors.visible is False
    card.match_node_colors.set_value(False)
    resolve_link_colors(card, links)
    assert card.set_individual_colors.visible is True
    assert card.mode is LinkColorMode.UNIFORM


def test_rebuild_keeps_list_identity(card, links):
    slices = card.slices
    resolve_link_colors(card, links, mode=LinkColorMode.INDIVIDUAL_COLORS)
    resolve_link_colors(card, links, mode=LinkColorMode.UNIFORM)
    assert card.slices is slices


def test_match_target_outside_match_mode_is_rejected(card, links):
    with pytest.raises(LinkColorModeError):
        resolve_link_colors(card, links, mode=LinkColorMode.UNIFORM, match_target=LinkMatchTarget.SOURCE)


def test_unknown_match_target_is_rejected(card):
    with pytest.raises(LinkColorModeError):
        card.set_mode(LinkColorMode.MATCH_NODE_COLORS, "sideways")


def test_link_label_handles_missing_endpoint():
    link = SankeyLink(source=_node("A", "red"), destination=None)
    assert link_label(link) == "A - "
