"""Vertex layouts and packed vertex buffers.

A layout is an ordered list of typed elements laid end to end. A vertex
buffer stores vertices of one layout as little-endian bytes, ready for
upload to a GPU vertex buffer.
"""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Any, Iterator, List, NamedTuple, Tuple, Union

PER_VERTEX_DATA = "D3D11_INPUT_PER_VERTEX_DATA"


@dataclass(frozen=True)
class RGBAColor:
    """A colour of four 8-bit channels."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0


class _Spec(NamedTuple):
    packer: struct.Struct
    dxgi_format: str
    semantic: str
    is_color_bytes: bool


class ElementType(enum.Enum):
    POSITION_2D = "Position2D"
    POSITION_3D = "Position3D"
    TEXTURE_2D = "Texture2D"
    NORMAL = "Normal"
    FLOAT3_COLOR = "Float3Color"
    FLOAT4_COLOR = "Float4Color"
    RGBA_COLOR = "RGBAColor"

    @property
    def size(self) -> int:
        """Size in bytes of one value of this type."""
        return _SPECS[self].packer.size

    @property
    def dxgi_format(self) -> str:
        return _SPECS[self].dxgi_format

    @property
    def semantic(self) -> str:
        return _SPECS[self].semantic


_SPECS = {
    ElementType.POSITION_2D: _Spec(struct.Struct("<2f"), "DXGI_FORMAT_R32G32_FLOAT", "Position", False),
    ElementType.POSITION_3D: _Spec(struct.Struct("<3f"), "DXGI_FORMAT_R32G32B32_FLOAT", "Position", False),
    ElementType.TEXTURE_2D: _Spec(struct.Struct("<2f"), "DXGI_FORMAT_R32G32_FLOAT", "Texcoord", False),
    ElementType.NORMAL: _Spec(struct.Struct("<3f"), "DXGI_FORMAT_R32G32B32_FLOAT", "Normal", False),
    ElementType.FLOAT3_COLOR: _Spec(struct.Struct("<3f"), "DXGI_FORMAT_R32G32B32_FLOAT", "Color", False),
    ElementType.FLOAT4_COLOR: _Spec(
        struct.Struct("<4f"), "DXGI_FORMAT_R32G32B32A32_FLOAT", "Color", False
    ),
    ElementType.RGBA_COLOR: _Spec(struct.Struct("<4B"), "DXGI_FORMAT_R8G8B8A8_UNORM", "Color", True),
}

AttributeValue = Union[Tuple[float, ...], RGBAColor]


def _encode(element_type: ElementType, value: Any) -> bytes:
    spec = _SPECS[element_type]
    if spec.is_color_bytes:
        if not isinstance(value, RGBAColor):
            raise TypeError(f"{element_type.value} needs an RGBAColor, got {value!r}")
        try:
            return spec.packer.pack(value.r, value.g, value.b, value.a)
        except struct.error as exc:
            raise ValueError(f"colour channels must be 0..255: {value!r}") from exc
    if isinstance(value, (str, bytes, RGBAColor)):
        raise TypeError(f"{element_type.value} cannot hold {value!r}")
    count = spec.packer.size // 4
    try:
        components = [float(c) for c in value]
    except TypeError as exc:
        raise TypeError(f"{element_type.value} cannot hold {value!r}") from exc
    if len(components) != count:
        raise TypeError(
            f"{element_type.value} needs {count} components, got {len(components)}"
        )
    return spec.packer.pack(*components)


def _decode(element_type: ElementType, data: Union[bytes, bytearray], offset: int) -> AttributeValue:
    spec = _SPECS[element_type]
    values = spec.packer.unpack_from(data, offset)
    if spec.is_color_bytes:
        return RGBAColor(*values)
    return tuple(values)


@dataclass(frozen=True)
class InputElementDesc:
    """Description of one vertex element for an input layout."""

    semantic_name: str
    semantic_index: int
    format: str
    input_slot: int
    aligned_byte_offset: int
    input_slot_class: str
    instance_data_step_rate: int


@dataclass(frozen=True)
class Element:
    """An element of a layout: its type and its byte offset in the vertex."""

    type: ElementType
    offset: int

    def size(self) -> int:
        return self.type.size

    def offset_after(self) -> int:
        return self.offset + self.size()

    def desc(self) -> InputElementDesc:
        return InputElementDesc(
            self.type.semantic,
            0,
            self.type.dxgi_format,
            0,
            self.offset,
            PER_VERTEX_DATA,
            0,
        )


class VertexLayout:
    """An ordered sequence of vertex elements packed without padding."""

    def __init__(self) -> None:
        self._elements: List[Element] = []

    def append(self, element_type: ElementType) -> VertexLayout:
        """Add an element after the existing ones; returns self for chaining."""
        if not isinstance(element_type, ElementType):
            raise TypeError(f"expected an ElementType, got {element_type!r}")
        self._elements.append(Element(element_type, self.size()))
        return self

    def resolve(self, element_type: ElementType) -> Element:
        """Return the first element of the given type."""
        for element in self._elements:
            if element.type is element_type:
                return element
        raise KeyError(f"layout has no {element_type!r} element")

    def resolve_by_index(self, index: int) -> Element:
        return self._elements[index]

    def size(self) -> int:
        """Size in bytes of one vertex."""
        return self._elements[-1].offset_after() if self._elements else 0

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(list(self._elements))

    def d3d_layout(self) -> List[InputElementDesc]:
        return [element.desc() for element in self._elements]

    def _copy(self) -> VertexLayout:
        duplicate = VertexLayout()
        duplicate._elements = list(self._elements)
        return duplicate


class Vertex:
    """A view of one vertex inside a vertex buffer."""

    __slots__ = ("_data", "_offset", "_layout")

    def __init__(self, data: bytearray, offset: int, layout: VertexLayout) -> None:
        self._data = data
        self._offset = offset
        self._layout = layout

    def attr(self, element_type: ElementType) -> AttributeValue:
        """Return the value of the first element of the given type."""
        element = self._layout.resolve(element_type)
        return _decode(element.type, self._data, self._offset + element.offset)

    def set_attribute_by_index(self, index: int, value: Any) -> None:
        """Store ``value`` in the element at ``index`` of the layout."""
        element = self._layout.resolve_by_index(index)
        encoded = _encode(element.type, value)
        start = self._offset + element.offset
        self._data[start:start + len(encoded)] = encoded


class VertexBuffer:
    """A growable array of vertices of one layout, stored as raw bytes."""

    def __init__(self, layout: VertexLayout) -> None:
        self._layout = layout._copy()
        self._data = bytearray()

    def layout(self) -> VertexLayout:
        return self._layout

    def __len__(self) -> int:
        stride = self._layout.size()
        return len(self._data) // stride if stride else 0

    def size_bytes(self) -> int:
        return len(self._data)

    def emplace_back(self, *args: Any) -> None:
        """Append a vertex built from one value per layout element."""
        if len(args) != len(self._layout):
            raise ValueError(
                f"expected {len(self._layout)} values, one per element, got {len(args)}"
            )
        stride = self._layout.size()
        start = len(self._data)
        self._data.extend(bytes(stride))
        vertex = Vertex(self._data, start, self._layout)
        try:
            for index, value in enumerate(args):
                vertex.set_attribute_by_index(index, value)
        except Exception:
            del self._data[start:]
            raise

    def back(self) -> Vertex:
        if not self._data:
            raise IndexError("back of an empty VertexBuffer")
        return Vertex(self._data, len(self._data) - self._layout.size(), self._layout)

    def front(self) -> Vertex:
        if not self._data:
            raise IndexError("front of an empty VertexBuffer")
        return Vertex(self._data, 0, self._layout)

    def __getitem__(self, index: int) -> Vertex:
        count = len(self)
        if index < 0:
            index += count
        if not 0 <= index < count:
            raise IndexError("vertex index out of range")
        return Vertex(self._data, index * self._layout.size(), self._layout)

    def data(self) -> bytes:
        return bytes(self._data)