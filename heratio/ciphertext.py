"""
Ciphertext container.
"""

from .polynomial import as_poly


class Ciphertext:
    """A pair (c0, c1) with c0 + c1*s ~ Delta*m under the secret key s."""

    def __init__(self, components):
        components = [as_poly(c) for c in components]
        if len(components) != 2:
            raise ValueError(f"a ciphertext has 2 components, got {len(components)}")
        self.components = components

    @property
    def size(self):
        return len(self.components)

    def get_components(self):
        return tuple(self.components)

    def __getitem__(self, index):
        return self.components[index]

    def __iter__(self):
        return iter(self.components)

    def __len__(self):
        return len(self.components)

    def tolist(self):
        return [[int(v) for v in c] for c in self.components]

    def __eq__(self, other):
        if not isinstance(other, Ciphertext):
            return NotImplemented
        return self.tolist() == other.tolist()

    def __repr__(self):
        return f"Ciphertext(size={self.size}, length={len(self.components[0])})"
