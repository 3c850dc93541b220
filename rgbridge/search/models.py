"""Search request and result value types."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Tuple

from rgbridge.primitives.errors import InvalidRequestError

_TOGGLES = ("case_insensitive", "whole_word", "regex", "ignore_hidden")


def _type_names(name: str, value: Any) -> Tuple[str, ...]:
    # A bare string would otherwise be split into single characters
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise InvalidRequestError(
            f"{name} must be a list of type names (got {value!r})", field=name
        )
    for item in value:
        if not isinstance(item, str) or not item:
            raise InvalidRequestError(
                f"{name} entries must be non-empty strings (got {item!r})", field=name
            )
    return tuple(value)


@dataclass(frozen=True)
class SearchRequest:
    """A single search, as the front end describes it.

    Attributes:
        root_path: File or directory to search.
        pattern: Search term or regular expression. Passed to the tool
            as one argv token, never through a shell.
        case_insensitive: Match regardless of case.
        whole_word: Only match whole words.
        regex: Allow the tool's extended regex engine.
        ignore_hidden: Include hidden files and directories (the tool
            skips them by default).
        max_depth: Directory depth limit; 0 means no limit.
        include_types: Tool file types to restrict the search to.
        exclude_types: Tool file types to leave out.
    """

    root_path: str
    pattern: str
    case_insensitive: bool = False
    whole_word: bool = False
    regex: bool = False
    ignore_hidden: bool = False
    max_depth: int = 0
    include_types: Tuple[str, ...] = field(default_factory=tuple)
    exclude_types: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.pattern:
            raise InvalidRequestError("pattern must not be empty", field="pattern")
        if not self.root_path:
            raise InvalidRequestError("root_path must not be empty", field="root_path")
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise InvalidRequestError(
                f"max_depth must be an integer (got {self.max_depth!r})",
                field="max_depth",
            )
        if self.max_depth < 0:
            raise InvalidRequestError(
                f"max_depth must be >= 0 (got {self.max_depth})", field="max_depth"
            )
        for name in _TOGGLES:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise InvalidRequestError(
                    f"{name} must be a boolean (got {value!r})", field=name
                )
        # Lists from JSON / argparse become tuples so the request stays hashable
        for name in ("include_types", "exclude_types"):
            object.__setattr__(self, name, _type_names(name, getattr(self, name)))

    def options(self) -> Dict[str, Any]:
        """Everything except root_path and pattern, as plain JSON values."""
        return {
            "case_insensitive": self.case_insensitive,
            "whole_word": self.whole_word,
            "regex": self.regex,
            "ignore_hidden": self.ignore_hidden,
            "max_depth": self.max_depth,
            "include_types": list(self.include_types),
            "exclude_types": list(self.exclude_types),
        }

    @classmethod
    def from_options(
        cls, root_path: str, pattern: str, options: Dict[str, Any]
    ) -> "SearchRequest":
        """Inverse of options(). Unknown keys are ignored."""
        return cls(
            root_path=root_path,
            pattern=pattern,
            case_insensitive=bool(options.get("case_insensitive", False)),
            whole_word=bool(options.get("whole_word", False)),
            regex=bool(options.get("regex", False)),
            ignore_hidden=bool(options.get("ignore_hidden", False)),
            max_depth=int(options.get("max_depth", 0)),
            include_types=tuple(options.get("include_types") or ()),
            exclude_types=tuple(options.get("exclude_types") or ()),
        )


@dataclass(frozen=True)
class SearchResult:
    """One matched line.

    match_text is the request's pattern, not the substring that matched.
    """

    file: str
    line: int
    column: int
    content: str
    match_text: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
