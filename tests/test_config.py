import pytest
from hypothesis import given
from hypothesis import strategies as st

from svdenc.encoder.config import (
    BitRangeFormat,
    CaseStyle,
    ConfigError,
    EncoderConfig,
    NumberFormat,
    RegistersOrClustersFirst,
    Sorting,
    change_case,
    format_number,
    load_config,
    parse_number,
)
from svdenc.encoder.errors import EncodeError

# lowercase words, digits only at the end, e.g. "usart1"
words = st.lists(st.from_regex(r"[a-z]{1,6}[0-9]{0,2}", fullmatch=True), min_size=1, max_size=4)


# ---- case styles

@pytest.mark.parametrize("style,expected", [
    (CaseStyle.Upper, "USART1_CR"),
    (CaseStyle.Lower, "usart1_cr"),
    (CaseStyle.Snake, "usart1_cr"),
    (CaseStyle.Constant, "USART1_CR"),
    (CaseStyle.Pascal, "Usart1Cr"),
    (CaseStyle.Camel, "usart1Cr"),
])
def test_change_case_styles(style, expected):
    assert change_case("Usart1_Cr", style) == expected


def test_change_case_without_style_is_identity():
    for name in ("GPIOA", "gpio_a", "Ch%s-x", "  odd name "):
        assert change_case(name, None) == name


def test_change_case_splits_camel_and_acronyms():
    assert change_case("HTTPServer", CaseStyle.Snake) == "http_server"
    assert change_case("gpioPortA", CaseStyle.Constant) == "GPIO_PORT_A"
    assert change_case("dma-ch-ctrl", CaseStyle.Pascal) == "DmaChCtrl"


def test_change_case_separates_single_letter_words():
    assert change_case("port_a_b", CaseStyle.Pascal) == "PortA_B"
    assert change_case("PortA_B", CaseStyle.Pascal) == "PortA_B"
    assert change_case("port_a_b", CaseStyle.Camel) == "portA_B"
    assert change_case("portA_B", CaseStyle.Snake) == "port_a_b"
    # a single letter ahead of a longer word still gets a boundary
    assert change_case("gpio_a_ctrl", CaseStyle.Pascal) == "GpioA_Ctrl"


def test_change_case_keeps_array_placeholders():
    assert change_case("ch%s_cr", CaseStyle.Upper) == "CH%s_CR"
    assert change_case("CH%s_CR", CaseStyle.Pascal) == "Ch%sCr"
    assert change_case("CH%s_CR", CaseStyle.Snake) == "ch%s_cr"
    assert change_case("gpio[%s]", CaseStyle.Constant) == "GPIO[%s]"
    assert change_case("Gpio[%s]", CaseStyle.Lower) == "gpio[%s]"


@given(words, st.sampled_from(list(CaseStyle)))
def test_change_case_is_idempotent(ws, style):
    once = change_case("_".join(ws), style)
    assert change_case(once, style) == once


@given(words, st.sampled_from([CaseStyle.Pascal, CaseStyle.Camel, CaseStyle.Constant]))
def test_change_case_back_to_snake(ws, style):
    snake = "_".join(ws)
    assert change_case(change_case(snake, style), CaseStyle.Snake) == snake


# ---- numbers

@pytest.mark.parametrize("style,expected", [
    (None, "171"),
    (NumberFormat.Dec, "171"),
    (NumberFormat.UpperHex, "0xAB"),
    (NumberFormat.LowerHex, "0xab"),
    (NumberFormat.UpperHex8, "0x000000AB"),
    (NumberFormat.LowerHex8, "0x000000ab"),
    (NumberFormat.UpperHex16, "0x00000000000000AB"),
    (NumberFormat.LowerHex16, "0x00000000000000ab"),
    (NumberFormat.Bin, "0b10101011"),
])
def test_format_number(style, expected):
    assert format_number(0xAB, style) == expected


def test_format_zero():
    assert format_number(0, None) == "0"
    assert format_number(0, NumberFormat.Bin) == "0b0"
    assert format_number(0, NumberFormat.UpperHex) == "0x0"


def test_format_negative_raises():
    with pytest.raises(EncodeError):
        format_number(-1, NumberFormat.UpperHex)


@given(st.integers(min_value=0, max_value=2**64 - 1), st.sampled_from([None] + list(NumberFormat)))
def test_number_format_round_trip(value, style):
    assert parse_number(format_number(value, style), style) == value


def test_parse_number_rejects_other_base():
    with pytest.raises(ValueError):
        parse_number("171", NumberFormat.UpperHex)
    with pytest.raises(ValueError):
        parse_number("0xAB", NumberFormat.Bin)


# ---- config

def test_default_config_is_empty():
    cfg = EncoderConfig()
    assert cfg.peripheral_name is None
    assert cfg.register_cluster_sorting is None
    assert cfg.registers_or_clusters_first is None


def test_config_from_dict():
    cfg = EncoderConfig.from_dict({
        "peripheral_name": "constant",
        "peripheral_base_address": "UPPER_HEX8",
        "register_cluster_sorting": "offset_reversed",
        "registers_or_clusters_first": "clusters",
        "field_bit_range": "msb_lsb",
        "field_name": None,
    })
    assert cfg.peripheral_name is CaseStyle.Constant
    assert cfg.peripheral_base_address is NumberFormat.UpperHex8
    assert cfg.register_cluster_sorting is Sorting.OffsetReversed
    assert cfg.registers_or_clusters_first is RegistersOrClustersFirst.Clusters
    assert cfg.field_bit_range is BitRangeFormat.MsbLsb
    assert cfg.field_name is None


def test_config_unknown_option():
    with pytest.raises(ConfigError, match="unknown option"):
        EncoderConfig.from_dict({"peripheral_color": "red"})


def test_config_invalid_value():
    with pytest.raises(ConfigError, match="register_name"):
        EncoderConfig.from_dict({"register_name": "kebab"})


def test_config_is_read_only():
    cfg = EncoderConfig()
    with pytest.raises(AttributeError):
        cfg.register_name = CaseStyle.Upper


def test_load_config(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("register_name: snake\nregister_reset_value: lower_hex8\n", encoding="utf-8")
    cfg = load_config(p)
    assert cfg == EncoderConfig(register_name=CaseStyle.Snake, register_reset_value=NumberFormat.LowerHex8)


def test_load_empty_config(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_config(p) == EncoderConfig()


def test_load_config_not_a_mapping(tmp_path):
    p = tmp_path / "list.yaml"
    p.write_text("- snake\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(p)


def test_load_config_malformed_yaml(tmp_path):
    p = tmp_path / "bad.yaml"
    p.write_text("register_name: [snake\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="malformed YAML"):
        load_config(p)
