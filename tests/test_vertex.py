import struct

import pytest

from enginekit.vertex import (
    PER_VERTEX_DATA,
    Element,
    ElementType,
    RGBAColor,
    VertexBuffer,
    VertexLayout,
)


def _pos_normal_layout():
    return VertexLayout().append(ElementType.POSITION_3D).append(ElementType.NORMAL)


def test_element_sizes_fixed_by_format():
    assert Element(ElementType.POSITION_3D, 0).size() == 12
    assert Element(ElementType.RGBA_COLOR, 0).size() == 4
    assert Element(ElementType.POSITION_2D, 0).size() == Element(ElementType.TEXTURE_2D, 0).size()
    assert Element(ElementType.POSITION_3D, 8).offset_after() == 20


def test_semantics_and_formats():
    assert Element(ElementType.POSITION_3D, 0).desc().semantic_name == "Position"
    assert Element(ElementType.TEXTURE_2D, 0).desc().semantic_name == "Texcoord"
    assert Element(ElementType.NORMAL, 0).desc().semantic_name == "Normal"
    assert Element(ElementType.RGBA_COLOR, 0).desc().format == "DXGI_FORMAT_R8G8B8A8_UNORM"
    assert (
        Element(ElementType.FLOAT4_COLOR, 0).desc().format
        == "DXGI_FORMAT_R32G32B32A32_FLOAT"
    )


def test_empty_layout_has_zero_size():
    layout = VertexLayout()
    assert layout.size() == 0
    assert len(layout) == 0


def test_layout_offsets_are_contiguous():
    layout = (
        VertexLayout()
        .append(ElementType.POSITION_3D)
        .append(ElementType.TEXTURE_2D)
        .append(ElementType.RGBA_COLOR)
        .append(ElementType.FLOAT4_COLOR)
    )
    assert len(layout) == 4
    assert layout.resolve_by_index(0).offset == 0
    for i in range(1, len(layout)):
        assert layout.resolve_by_index(i).offset == layout.resolve_by_index(i - 1).offset_after()
    assert layout.size() == sum(e.size() for e in layout)


def test_resolve_returns_first_of_type():
    layout = (
        VertexLayout()
        .append(ElementType.POSITION_3D)
        .append(ElementType.FLOAT3_COLOR)
        .append(ElementType.FLOAT3_COLOR)
    )
    element = layout.resolve(ElementType.FLOAT3_COLOR)
    assert element == layout.resolve_by_index(1)


def test_resolve_missing_raises():
    with pytest.raises(KeyError):
        _pos_normal_layout().resolve(ElementType.TEXTURE_2D)


def test_append_rejects_non_element_type():
    with pytest.raises(TypeError):
        VertexLayout().append("Position3D")


def test_element_desc():
    element = Element(ElementType.NORMAL, ElementType.POSITION_3D.size)
    desc = element.desc()
    assert desc.semantic_name == "Normal"
    assert desc.format == "DXGI_FORMAT_R32G32B32_FLOAT"
    assert desc.aligned_byte_offset == element.offset
    assert desc.input_slot_class == PER_VERTEX_DATA
    assert desc.semantic_index == 0


def test_d3d_layout_matches_elements():
    layout = _pos_normal_layout()
    descs = layout.d3d_layout()
    assert [d.semantic_name for d in descs] == ["Position", "Normal"]
    assert [d.aligned_byte_offset for d in descs] == [e.offset for e in layout]


def test_emplace_back_round_trip():
    buf = VertexBuffer(_pos_normal_layout())
    buf.emplace_back((1.0, 2.0, 3.0), (0.0, 1.0, 0.0))
    buf.emplace_back((-4.5, 0.25, 8.0), (1.0, 0.0, 0.0))
    assert len(buf) == 2
    assert buf.size_bytes() == 2 * buf.layout().size()
    assert buf.front().attr(ElementType.POSITION_3D) == (1.0, 2.0, 3.0)
    assert buf.back().attr(ElementType.NORMAL) == (1.0, 0.0, 0.0)
    assert buf[1].attr(ElementType.POSITION_3D) == (-4.5, 0.25, 8.0)
    assert buf[-1].attr(ElementType.POSITION_3D) == buf.back().attr(ElementType.POSITION_3D)


def test_data_is_little_endian_floats():
    layout = VertexLayout().append(ElementType.POSITION_3D)
    buf = VertexBuffer(layout)
    buf.emplace_back((1.0, 2.0, 3.0))
    assert buf.data() == struct.pack("<3f", 1.0, 2.0, 3.0)


def test_rgba_color_round_trip():
    layout = VertexLayout().append(ElementType.POSITION_2D).append(ElementType.RGBA_COLOR)
    buf = VertexBuffer(layout)
    color = RGBAColor(10, 20, 30, 255)
    buf.emplace_back((0.5, -0.5), color)
    assert buf[0].attr(ElementType.RGBA_COLOR) == color
    assert buf.data()[-4:] == bytes([10, 20, 30, 255])


def test_set_attribute_by_index_updates_vertex():
    buf = VertexBuffer(_pos_normal_layout())
    buf.emplace_back((1.0, 1.0, 1.0), (0.0, 0.0, 1.0))
    buf[0].set_attribute_by_index(1, (0.0, -1.0, 0.0))
    assert buf[0].attr(ElementType.NORMAL) == (0.0, -1.0, 0.0)
    assert buf[0].attr(ElementType.POSITION_3D) == (1.0, 1.0, 1.0)


def test_wrong_argument_count_raises():
    buf = VertexBuffer(_pos_normal_layout())
    with pytest.raises(ValueError):
        buf.emplace_back((1.0, 2.0, 3.0))
    assert len(buf) == 0


def test_type_mismatch_raises_and_rolls_back():
    buf = VertexBuffer(_pos_normal_layout())
    with pytest.raises(TypeError):
        buf.emplace_back((1.0, 2.0, 3.0), (1.0, 2.0))
    assert buf.size_bytes() == 0


def test_color_type_mismatch():
    layout = VertexLayout().append(ElementType.RGBA_COLOR)
    buf = VertexBuffer(layout)
    with pytest.raises(TypeError):
        buf.emplace_back((1.0, 0.0, 0.0, 1.0))
    float_layout = VertexLayout().append(ElementType.FLOAT4_COLOR)
    with pytest.raises(TypeError):
        VertexBuffer(float_layout).emplace_back(RGBAColor(1, 2, 3, 4))


def test_color_channel_out_of_range():
    buf = VertexBuffer(VertexLayout().append(ElementType.RGBA_COLOR))
    with pytest.raises(ValueError):
        buf.emplace_back(RGBAColor(256, 0, 0, 0))
    assert len(buf) == 0


def test_access_on_empty_buffer_raises():
    buf = VertexBuffer(_pos_normal_layout())
    with pytest.raises(IndexError):
        buf.front()
    with pytest.raises(IndexError):
        buf.back()
    with pytest.raises(IndexError):
        buf[0]


def test_buffer_keeps_its_own_layout():
    layout = VertexLayout().append(ElementType.POSITION_3D)
    buf = VertexBuffer(layout)
    layout.append(ElementType.NORMAL)
    assert len(buf.layout()) == 1
    buf.emplace_back((0.0, 0.0, 0.0))
    assert buf.size_bytes() == ElementType.POSITION_3D.size