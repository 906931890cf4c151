from natividade_map.services.formatting import format_fixed, format_integer, format_max
from natividade_map.services.thematic.legend import build_legend, hidden_legend

PALETTE = ["#ffffb2", "#fecc5c", "#fd8d3c", "#f03b20", "#bd0026"]


def test_entries_span_previous_break_starting_at_zero():
    legend = build_legend("v0001", [30, 50, 70, 90, 100], PALETTE)

    assert legend.visible
    assert legend.title == "Legenda: v0001"
    assert [e.label for e in legend.entries] == [
        "0 - 30", "30 - 50", "50 - 70", "70 - 90", "90 - 100",
    ]
    assert [e.color for e in legend.entries] == PALETTE
    assert legend.entries[0].start == 0


def test_first_entry_starts_at_zero_even_with_larger_minimum():
    legend = build_legend("AREA_KM2", [1500.25, 2500], PALETTE[:2])
    assert legend.entries[0].label == "0 - 1.500,3"
    assert legend.entries[1].label == "1.500,3 - 2.500"


def test_labels_round_half_away_from_zero():
    legend = build_legend("v0005", [0.25, 0.35, 1234.45, 2.05, 9.95], PALETTE)

    assert [e.label for e in legend.entries] == [
        "0 - 0,3", "0,3 - 0,4", "0,4 - 1.234,5", "1.234,5 - 2,1", "2,1 - 10",
    ]


def test_hidden_legend():
    legend = hidden_legend()
    assert not legend.visible
    assert legend.entries == []


def test_pt_br_number_formatting():
    assert format_max(1234.56, 1) == "1.234,6"
    assert format_max(20.0, 1) == "20"
    assert format_max(2.5, 1) == "2,5"
    assert format_max(0.04, 1) == "0"
    assert format_max(1.23456, 3) == "1,235"
    assert format_fixed(0.123456, 4) == "0,1235"
    assert format_integer(1234567) == "1.234.567"


def test_ties_round_up_on_the_decimal_form():
    assert format_max(0.25, 1) == "0,3"
    assert format_max(2.05, 1) == "2,1"
    assert format_max(9.95, 1) == "10"
    assert format_max(-2.05, 1) == "-2,1"
    assert format_fixed(1.005, 2) == "1,01"
    assert format_integer(2.5) == "3"
