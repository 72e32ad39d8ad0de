from typing import Dict, Any, Tuple

DEFAULT_COLOR = (1.0, 1.0, 1.0)
DEFAULT_TEX_POS = (0.5, 0.5)
DEFAULT_TEX_LAYER = 0
MAX_TEX_LAYER = 0xFFFF

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]


class Vertex:
    """Point sample of a mesh surface with color and texture addressing."""

    __slots__ = ("pos", "color", "tex_pos", "tex_layer")

    def __init__(self,
                 pos: Vec3,
                 color: Vec3 = DEFAULT_COLOR,
                 tex_pos: Vec2 = DEFAULT_TEX_POS,
                 tex_layer: int = DEFAULT_TEX_LAYER):
        if not 0 <= int(tex_layer) <= MAX_TEX_LAYER:
            raise ValueError(f"tex_layer must fit in 16 bits, got {tex_layer}")
        object.__setattr__(self, "pos", tuple(float(p) for p in pos))
        object.__setattr__(self, "color", tuple(float(c) for c in color))
        object.__setattr__(self, "tex_pos", tuple(float(t) for t in tex_pos))
        object.__setattr__(self, "tex_layer", int(tex_layer))

    def __setattr__(self, name, value):
        raise AttributeError("Vertex is immutable")

    def __reduce__(self):
        return (Vertex, (self.pos, self.color, self.tex_pos, self.tex_layer))

    @staticmethod
    def lerp(a: 'Vertex', b: 'Vertex', amount: float) -> 'Vertex':
        """
        Blend two vertices: every continuous attribute becomes
        ``amount * a + (1 - amount) * b``.

        Args:
            a (Vertex): Vertex weighted by ``amount``.
            b (Vertex): Vertex weighted by ``1 - amount``.
            amount (float): Blend factor, 0.5 gives the midpoint.

        Returns:
            Vertex: New vertex carrying the texture layer of ``a``.

        Raises:
            ValueError: If the two vertices address different texture layers.
        """
        if a.tex_layer != b.tex_layer:
            raise ValueError(
                f"Cannot interpolate across texture layers {a.tex_layer} and {b.tex_layer}"
            )

        def blend(u, v):
            return tuple(amount * x + (1.0 - amount) * y for x, y in zip(u, v))

        return Vertex(
            pos=blend(a.pos, b.pos),
            color=blend(a.color, b.color),
            tex_pos=blend(a.tex_pos, b.tex_pos),
            tex_layer=a.tex_layer,
        )

    def with_pos(self, pos: Vec3) -> 'Vertex':
        """Copy of this vertex moved to ``pos``."""
        return Vertex(pos, self.color, self.tex_pos, self.tex_layer)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "pos": list(self.pos),
            "color": list(self.color),
            "tex_pos": list(self.tex_pos),
            "tex_layer": self.tex_layer,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Vertex':
        """Create from dictionary representation."""
        return cls(
            pos=data["pos"],
            color=data.get("color", DEFAULT_COLOR),
            tex_pos=data.get("tex_pos", DEFAULT_TEX_POS),
            tex_layer=data.get("tex_layer", DEFAULT_TEX_LAYER),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return (self.pos == other.pos and self.color == other.color
                and self.tex_pos == other.tex_pos and self.tex_layer == other.tex_layer)

    def __hash__(self) -> int:
        return hash((self.pos, self.color, self.tex_pos, self.tex_layer))

    def __repr__(self) -> str:
        return (f"Vertex(pos={self.pos}, color={self.color}, "
                f"tex_pos={self.tex_pos}, tex_layer={self.tex_layer})")
