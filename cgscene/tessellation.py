"""Hints that control how primitive shapes are subdivided."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass


@dataclass
class TessellationHints:
    """Subdivision counts and which parts of a shape to generate."""

    detail_ratio: float = 1.0
    target_slices: int = 40
    target_stacks: int = 20
    create_front_face: bool = True
    create_back_face: bool = False
    create_normals: bool = True
    create_texture_coords: bool = True
    create_top: bool = True
    create_body: bool = True
    create_bottom: bool = True

    def __post_init__(self) -> None:
        if self.target_slices < 0 or self.target_stacks < 0:
            raise ValueError("subdivision counts must not be negative")

    def copy(self) -> TessellationHints:
        """Return an independent copy."""
        return dataclasses.replace(self)