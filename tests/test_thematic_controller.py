import pytest

from natividade_map.core.exceptions import NoValidNumericDataError
from natividade_map.services.map_controller import AppState
from natividade_map.services.thematic.controller import ThematicController
from natividade_map.services.thematic.state import ThematicState

PALETTE = ["#ffffb2", "#fecc5c", "#fd8d3c", "#f03b20", "#bd0026"]


@pytest.fixture
def state(settings):
    return AppState(current_basemap="streets", selected_attributes=set())


@pytest.fixture
def thematic(settings, policy, state):
    return ThematicController(settings, policy, state)


@pytest.fixture
def loaded(thematic, state, sector_store):
    state.layers["setores"] = sector_store
    return sector_store


def fills(store):
    return [f.style.fill_color for f in store]


def test_apply_without_loaded_layer_is_noop(thematic, state):
    assert thematic.apply("v0001") is None
    assert state.thematic == ThematicState()
    assert not state.legend.visible


def test_apply_classifies_and_restyles(thematic, state, loaded):
    updates = thematic.apply("v0001")

    assert len(updates) == len(loaded)
    assert state.thematic.attribute == "v0001"
    assert state.thematic.breaks == (30, 50, 70, 90, 100)
    assert state.thematic.palette == tuple(PALETTE)

    # 10..100 e um setor sem valor no fim
    assert fills(loaded) == [
        PALETTE[0], PALETTE[0], PALETTE[0],
        PALETTE[1], PALETTE[1],
        PALETTE[2], PALETTE[2],
        PALETTE[3], PALETTE[3],
        PALETTE[4],
        "#cccccc",
    ]
    for feature in loaded:
        assert feature.style.weight == 1
        assert feature.style.color == "#333333"
        assert feature.style.fill_opacity == 0.8


def test_apply_refreshes_legend(thematic, state, loaded):
    thematic.apply("v0001")

    assert state.legend.visible
    assert state.legend.title == "Legenda: v0001"
    assert [e.label for e in state.legend.entries][0] == "0 - 30"
    assert [e.color for e in state.legend.entries] == PALETTE


def test_no_valid_data_leaves_everything_untouched(thematic, state, loaded):
    before = fills(loaded)

    with pytest.raises(NoValidNumericDataError):
        thematic.apply("texto")

    assert state.thematic == ThematicState()
    assert not state.legend.visible
    assert fills(loaded) == before


def test_no_valid_data_keeps_previous_thematic_state(thematic, state, loaded):
    thematic.apply("v0001")
    previous = state.thematic
    styled = fills(loaded)

    with pytest.raises(NoValidNumericDataError):
        thematic.apply("ausente")

    assert state.thematic is previous
    assert state.legend.title == "Legenda: v0001"
    assert fills(loaded) == styled


def test_apply_then_apply_keeps_only_latest(thematic, state, loaded):
    thematic.apply("v0001")
    thematic.apply("v0002")

    assert state.thematic.attribute == "v0002"
    assert state.thematic.breaks == (2000, 4000, 6000, 8000, 10000)
    assert state.legend.title == "Legenda: v0002"
    # O setor sem v0001 tem v0002 = 500: agora é colorido
    assert loaded.get(10).style.fill_color == PALETTE[0]


def test_reset_restores_layer_color(thematic, state, loaded):
    thematic.apply("v0001")
    thematic.reset()

    assert not state.thematic.active
    assert not state.legend.visible
    for feature in loaded:
        assert feature.style.fill_color == "#f093fb"
        assert feature.style.color == "#f093fb"
        assert feature.style.weight == 2
        assert feature.style.fill_opacity == 0.3


def test_reset_twice_is_same_as_once(thematic, state, loaded):
    thematic.apply("v0001")
    thematic.reset()
    once = [f.style for f in loaded]

    thematic.reset()

    assert [f.style for f in loaded] == once
    assert not state.legend.visible
    assert state.thematic == ThematicState()


def test_reset_without_loaded_layer_is_noop(thematic):
    assert thematic.reset() is None


def test_restore_after_hover_uses_thematic_color(thematic, policy, loaded):
    thematic.apply("v0001")
    feature = loaded.get(4)  # v0001 = 50
    feature.style = policy.hover_style(feature)

    restored = thematic.restore("setores", feature)

    assert restored.fill_color == PALETTE[1]
    assert restored.weight == 1


def test_restore_after_reset_uses_default(thematic, loaded):
    thematic.apply("v0001")
    thematic.reset()

    restored = thematic.restore("setores", loaded.get(4))

    assert restored.fill_color == "#f093fb"
    assert restored.fill_opacity == 0.3
