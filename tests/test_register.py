import pytest

from svdenc.encoder.base import encode
from svdenc.encoder.config import BitRangeFormat, CaseStyle, EncoderConfig, NumberFormat, RegistersOrClustersFirst, Sorting
from svdenc.encoder.dim import dim_index_text
from svdenc.encoder.errors import UnsupportedEntityError
from svdenc.encoder.register import encode_cluster, encode_register
from svdenc.svd.enums import (
    Access,
    BitRangeType,
    DataType,
    ModifiedWriteValues,
    Protection,
    ReadAction,
    Usage,
)
from svdenc.svd.model import (
    Array,
    BitRange,
    ClusterInfo,
    DimArrayIndex,
    DimElement,
    EnumeratedValue,
    EnumeratedValues,
    FieldInfo,
    RegisterInfo,
    RegisterProperties,
    Single,
    UseEnumeratedValues,
    WriteAsRead,
    WriteConstraintRange,
)


def test_register_full_order(config):
    info = RegisterInfo(
        name="CR1",
        address_offset=0x10,
        display_name="Control 1",
        description="control register",
        alternate_group="ALT",
        alternate_register="CR2",
        properties=RegisterProperties(size=16, access=Access.ReadOnly, protection=Protection.Secure,
                                      reset_value=0x8000, reset_mask=0xFFFF),
        data_type=DataType.U16,
        modified_write_values=ModifiedWriteValues.OneToClear,
        write_constraint=WriteAsRead(True),
        read_action=ReadAction.Clear,
        fields=(),
        derived_from="CR0",
    )

    node = encode_register(info, config)

    assert node.name == "register"
    assert node.child_names() == [
        "name", "displayName", "description", "alternateGroup", "alternateRegister",
        "addressOffset", "size", "access", "protection", "resetValue", "resetMask",
        "dataType", "modifiedWriteValues", "writeConstraint", "readAction", "fields",
    ]
    assert node.child("protection").text == "s"
    assert node.child("dataType").text == "uint16_t"
    assert node.child("modifiedWriteValues").text == "oneToClear"
    assert node.child("writeConstraint").child("writeAsRead").text == "true"
    assert node.attributes == {"derivedFrom": "CR0"}


def test_register_number_and_name_formats():
    cfg = EncoderConfig(
        register_name=CaseStyle.Lower,
        register_address_offset=NumberFormat.UpperHex,
        register_size=NumberFormat.Dec,
        register_reset_value=NumberFormat.UpperHex8,
        register_reset_mask=NumberFormat.LowerHex8,
    )
    info = RegisterInfo("ISR", 0x1C, properties=RegisterProperties(size=32, reset_value=0xAB, reset_mask=0xFFFFFFFF),
                        alternate_register="ALT_ISR", derived_from="ISR0")

    node = encode_register(info, cfg)

    assert node.child("name").text == "isr"
    assert node.child("alternateRegister").text == "alt_isr"
    assert node.child("addressOffset").text == "0x1C"
    assert node.child("size").text == "32"
    assert node.child("resetValue").text == "0x000000AB"
    assert node.child("resetMask").text == "0xffffffff"
    assert node.attributes["derivedFrom"] == "isr0"


def test_register_without_fields_has_no_fields_node(config):
    node = encode_register(RegisterInfo("SR", 4), config)
    assert node.child_names() == ["name", "addressOffset"]


def test_register_array(config):
    reg = Array(RegisterInfo("DATA%s", 0x20), DimElement(dim=4, dim_increment=4, dim_index=("0", "1", "2", "3")))
    node = encode(reg, config)
    assert node.name == "register"
    assert node.child_names() == ["dim", "dimIncrement", "dimIndex", "name", "addressOffset"]
    assert node.child("dimIndex").text == "0-3"


def test_dim_array_index(config):
    dim = DimElement(
        dim=2, dim_increment=8, dim_index=("RX", "TX"), dim_name="ChannelT",
        dim_array_index=DimArrayIndex("CHANNEL", (EnumeratedValue("RX", value=0), EnumeratedValue("TX", value=1))),
    )
    node = encode(Array(RegisterInfo("CH_%s", 0), dim), config)
    assert node.child("dimIndex").text == "RX,TX"
    assert node.child("dimName").text == "ChannelT"
    dai = node.child("dimArrayIndex")
    assert dai.child_names() == ["headerEnumName", "enumeratedValue", "enumeratedValue"]


@pytest.mark.parametrize("index,expected", [
    (("0", "1", "2"), "0-2"),
    (("4", "5"), "4-5"),
    (("A", "B", "C"), "A-C"),
    (("1", "3"), "1,3"),
    (("01", "02"), "01,02"),
    (("C", "B"), "C,B"),
    (("7",), "7"),
    (("rx", "tx"), "rx,tx"),
])
def test_dim_index_text(index, expected):
    assert dim_index_text(index) == expected


@pytest.mark.parametrize("fmt,names,texts", [
    (BitRangeFormat.OffsetWidth, ["bitOffset", "bitWidth"], ["4", "3"]),
    (BitRangeFormat.MsbLsb, ["lsb", "msb"], ["4", "6"]),
    (BitRangeFormat.BitRange, ["bitRange"], ["[6:4]"]),
])
def test_field_bit_range_override(fmt, names, texts):
    node = encode(FieldInfo("MODE", BitRange(4, 3)), EncoderConfig(field_bit_range=fmt))
    assert node.child_names() == ["name"] + names
    assert [c.text for c in node.children[1:]] == texts


@pytest.mark.parametrize("range_type,names", [
    (BitRangeType.OffsetWidth, ["bitOffset", "bitWidth"]),
    (BitRangeType.MsbLsb, ["lsb", "msb"]),
    (BitRangeType.BitRange, ["bitRange"]),
])
def test_field_bit_range_follows_model(config, range_type, names):
    node = encode(FieldInfo("EN", BitRange(0, 1, range_type)), config)
    assert node.child_names() == ["name"] + names


def test_field_full(config):
    info = FieldInfo(
        name="ERR",
        description="error code",
        bit_range=BitRange.from_msb_lsb(7, 4),
        access=Access.ReadWriteOnce,
        modified_write_values=ModifiedWriteValues.ZeroToSet,
        write_constraint=WriteConstraintRange(0, 9),
        read_action=ReadAction.ModifyExternal,
        enumerated_values=(
            EnumeratedValues(name="ErrCode", usage=Usage.Read, values=(
                EnumeratedValue("NONE", "no error", value=0),
                EnumeratedValue("OTHER", is_default=True),
            )),
            EnumeratedValues(derived_from="ErrCode"),
        ),
        derived_from="ERR0",
    )

    node = encode(info, config)

    assert node.child_names() == [
        "name", "description", "lsb", "msb", "access", "modifiedWriteValues",
        "writeConstraint", "readAction", "enumeratedValues", "enumeratedValues",
    ]
    assert node.attributes == {"derivedFrom": "ERR0"}
    rng = node.child("writeConstraint").child("range")
    assert [c.text for c in rng.children] == ["0", "9"]

    evs, derived = [c for c in node.children if c.name == "enumeratedValues"]
    assert evs.child_names() == ["name", "usage", "enumeratedValue", "enumeratedValue"]
    assert evs.children[2].child_names() == ["name", "description", "value"]
    assert evs.children[3].child("isDefault").text == "true"
    assert derived.children == []
    assert derived.attributes == {"derivedFrom": "ErrCode"}


def test_enumerated_value_formats():
    cfg = EncoderConfig(
        enumerated_values_name=CaseStyle.Pascal,
        enumerated_value_name=CaseStyle.Constant,
        enumerated_value_value=NumberFormat.Bin,
    )
    evs = EnumeratedValues(name="err_code", derived_from="base_code", values=(EnumeratedValue("timeOut", value=5),))

    node = encode(evs, cfg)

    assert node.child("name").text == "ErrCode"
    assert node.attributes["derivedFrom"] == "BaseCode"
    ev = node.child("enumeratedValue")
    assert ev.child("name").text == "TIME_OUT"
    assert ev.child("value").text == "0b101"


def test_use_enumerated_values_constraint(config):
    node = encode(FieldInfo("F", BitRange(0, 2), write_constraint=UseEnumeratedValues(False)), config)
    assert node.child("writeConstraint").child("useEnumeratedValues").text == "false"


def test_field_array_and_sorting():
    fields = (
        Single(FieldInfo("B", BitRange(4, 1))),
        Array(FieldInfo("A%s", BitRange(0, 1)), DimElement(dim=4, dim_increment=1)),
    )
    cfg = EncoderConfig(field_sorting=Sorting.Offset, field_name=CaseStyle.Lower)

    node = encode_register(RegisterInfo("CR", 0, fields=fields), cfg)

    encoded = node.child("fields").children
    assert [f.name for f in encoded] == ["field", "field"]
    assert encoded[0].child_names() == ["dim", "dimIncrement", "name", "bitOffset", "bitWidth"]
    assert encoded[0].child("name").text == "a%s"
    assert encoded[1].child("name").text == "b"


def test_cluster_children_follow_ordering():
    cfg = EncoderConfig(
        cluster_name=CaseStyle.Upper,
        cluster_address_offset=NumberFormat.UpperHex,
        registers_or_clusters_first=RegistersOrClustersFirst.Registers,
        register_cluster_sorting=Sorting.Offset,
    )
    inner = Single(ClusterInfo("sub", 0x0))
    info = ClusterInfo(
        name="ch",
        address_offset=0x40,
        description="channel",
        alternate_cluster="ch_alt",
        header_struct_name="ch_t",
        default_register_properties=RegisterProperties(size=8),
        children=(inner, Single(RegisterInfo("B", 8)), Single(RegisterInfo("A", 4))),
        derived_from="ch0",
    )

    node = encode_cluster(info, cfg)

    assert node.name == "cluster"
    assert node.child_names() == [
        "name", "description", "alternateCluster", "headerStructName", "addressOffset",
        "size", "register", "register", "cluster",
    ]
    assert node.child("name").text == "CH"
    assert node.child("alternateCluster").text == "CH_ALT"
    assert node.child("addressOffset").text == "0x40"
    assert [c.child("name").text for c in node.children[6:]] == ["A", "B", "SUB"]
    assert node.attributes == {"derivedFrom": "CH0"}


def test_cluster_array(config):
    node = encode(Array(ClusterInfo("CH[%s]", 0x10), DimElement(dim=2, dim_increment=0x10)), config)
    assert node.name == "cluster"
    assert node.child_names() == ["dim", "dimIncrement", "name", "addressOffset"]


def test_unsupported_entity(config):
    with pytest.raises(UnsupportedEntityError, match="no encoder for str"):
        encode("REG", config)
