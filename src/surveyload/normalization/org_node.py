"""
Organizational hierarchy paths.

Org node codes arrive embedded in labels such as "N02.3.5.10.11.20". Only
digits and the level separator carry meaning; everything else is dropped.
"""

from dataclasses import dataclass

from surveyload.errors import InvalidOrgNodeString

DEFAULT_SEPARATOR = "."


@dataclass(frozen=True)
class OrgNode:
    """A respondent's position in the organization, one index per level."""

    levels: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "levels", tuple(self.levels))

    @classmethod
    def from_string(cls, s: str, separator: str = DEFAULT_SEPARATOR) -> "OrgNode":
        """
        Parse an org node from a formatted string.

        Characters other than digits and the separator are removed, the rest
        is split on the separator and empty segments are dropped.

        Examples:
            "N01."             -> (1,)
            "N02.3.5.10.11.20" -> (2, 3, 5, 10, 11, 20)
            "N01.0.0.3"        -> (1, 0, 0, 3)

        Args:
            s: Raw org node string.
            separator: Level separator.

        Returns:
            Parsed OrgNode.

        Raises:
            InvalidOrgNodeString: If the separator is unusable or no level
                survives filtering.
        """
        if not separator or any(ch.isdigit() for ch in separator):
            msg = f"Invalid org node separator: {separator!r}"
            raise InvalidOrgNodeString(msg)

        # Multi-character separators are kept only where they appear whole
        kept: list[str] = []
        i = 0
        while i < len(s):
            if s.startswith(separator, i):
                kept.append(separator)
                i += len(separator)
                continue
            if s[i] in "0123456789":
                kept.append(s[i])
            i += 1

        segments = [seg for seg in "".join(kept).split(separator) if seg]
        if not segments:
            msg = f"No org node levels found in {s!r}"
            raise InvalidOrgNodeString(msg)

        try:
            levels = tuple(int(seg) for seg in segments)
        except ValueError as e:
            msg = f"Invalid org node string {s!r}: {e}"
            raise InvalidOrgNodeString(msg) from e

        return cls(levels)

    @property
    def depth(self) -> int:
        """Number of levels in the path."""
        return len(self.levels)

    def parent(self) -> "OrgNode | None":
        """The enclosing node, or None at the top level."""
        if self.depth <= 1:
            return None
        return OrgNode(self.levels[:-1])

    def is_ancestor_of(self, other: "OrgNode") -> bool:
        """Whether other lies strictly below this node."""
        return other.depth > self.depth and other.levels[: self.depth] == self.levels

    def __str__(self) -> str:
        return DEFAULT_SEPARATOR.join(str(level) for level in self.levels)
