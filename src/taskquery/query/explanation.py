"""Human-readable descriptions of compiled filters."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Explanation:
    """A description, optionally with nested child explanations.

    Simple filters have no children. Boolean combinations have one
    child per operand, so the whole expression can be shown as a tree.
    """

    description: str
    children: tuple[Explanation, ...] = field(default_factory=tuple)

    @classmethod
    def boolean_and(cls, children: list[Explanation]) -> Explanation:
        return cls("AND (All of):", tuple(children))

    @classmethod
    def boolean_or(cls, children: list[Explanation]) -> Explanation:
        return cls("OR (At least one of):", tuple(children))

    @classmethod
    def boolean_xor(cls, children: list[Explanation]) -> Explanation:
        return cls("XOR (Exactly one of):", tuple(children))

    @classmethod
    def boolean_not(cls, child: Explanation) -> Explanation:
        return cls("NOT:", (child,))

    def as_string(self, indent: str = "") -> str:
        """Render the explanation, indenting each nesting level by two spaces."""
        lines = [f"{indent}{self.description}"]
        for child in self.children:
            lines.append(child.as_string(indent + "  "))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.as_string()
