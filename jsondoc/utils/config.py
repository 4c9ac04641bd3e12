"""
Configuration and limits for jsondoc parsing.

Settings are grouped into small dataclasses. ``ParseLimits`` and
``ParseConfig`` also accept every grouped setting as a flat keyword, so
``ParseConfig(include_context=False)`` and
``ParseConfig(error_reporting=ErrorReporting(include_context=False))`` are
equivalent.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional


@dataclass
class SizeLimits:
    """Input and token size limits."""
    max_input_size: int = 10 * 1024 * 1024
    max_string_length: int = 1024 * 1024
    max_number_length: int = 100


@dataclass
class StructureLimits:
    """Document structure complexity limits."""
    max_nesting_depth: int = 100
    max_object_keys: int = 10000
    max_list_items: int = 100000


@dataclass
class ParsingBehavior:
    """Core tokenizing behavior settings."""
    skip_unknown_characters: bool = False


@dataclass
class ErrorReporting:
    """Error reporting and context settings."""
    include_position: bool = True
    include_context: bool = True
    max_error_context: int = 50


def _split_options(options: dict[str, Any], *groups: type) -> list[dict[str, Any]]:
    """Distribute flat keyword options over the dataclass groups that own them."""
    names = [{f.name for f in fields(group)} for group in groups]
    unknown = set(options).difference(*names)
    if unknown:
        raise TypeError(f"Unknown option(s): {', '.join(sorted(unknown))}")
    return [{k: v for k, v in options.items() if k in owned} for owned in names]


@dataclass
class ParseLimits:
    """Resource limits applied while tokenizing and parsing."""

    size_limits: SizeLimits = field(default_factory=SizeLimits)
    structure_limits: StructureLimits = field(default_factory=StructureLimits)

    def __init__(
        self,
        *,
        size_limits: Optional[SizeLimits] = None,
        structure_limits: Optional[StructureLimits] = None,
        **flat_limits: int,
    ):
        size_options, structure_options = _split_options(
            flat_limits, SizeLimits, StructureLimits
        )
        self.size_limits = size_limits or SizeLimits(**size_options)
        self.structure_limits = structure_limits or StructureLimits(
            **structure_options
        )

        for group in (self.size_limits, self.structure_limits):
            for f in fields(group):
                if getattr(group, f.name) <= 0:
                    raise ValueError(f"{f.name} must be positive")

    @property
    def max_input_size(self) -> int:
        """Maximum input size in characters (bytes for undecoded input)."""
        return self.size_limits.max_input_size

    @property
    def max_string_length(self) -> int:
        return self.size_limits.max_string_length

    @property
    def max_number_length(self) -> int:
        return self.size_limits.max_number_length

    @property
    def max_nesting_depth(self) -> int:
        """Maximum nesting depth; the top-level object counts as depth 1."""
        return self.structure_limits.max_nesting_depth

    @property
    def max_object_keys(self) -> int:
        return self.structure_limits.max_object_keys

    @property
    def max_list_items(self) -> int:
        return self.structure_limits.max_list_items


@dataclass
class ParseConfig:
    """
    Configuration options for jsondoc parsing.

    ``limits`` defaults to ``None``: nothing is bounded except the interpreter
    stack, so any rendered document parses back. Pass a ``ParseLimits`` (or use
    ``ParseConfig.conservative()``) when the input is untrusted.
    """

    limits: Optional[ParseLimits] = None
    behavior: ParsingBehavior = field(default_factory=ParsingBehavior)
    error_reporting: ErrorReporting = field(default_factory=ErrorReporting)

    def __init__(
        self,
        *,
        limits: Optional[ParseLimits] = None,
        behavior: Optional[ParsingBehavior] = None,
        error_reporting: Optional[ErrorReporting] = None,
        **config_options: Any,
    ):
        behavior_options, reporting_options = _split_options(
            config_options, ParsingBehavior, ErrorReporting
        )
        self.limits = limits
        self.behavior = behavior or ParsingBehavior(**behavior_options)
        self.error_reporting = error_reporting or ErrorReporting(
            **reporting_options
        )

    @classmethod
    def conservative(cls, **config_options: Any) -> "ParseConfig":
        """Create a configuration with the default ParseLimits switched on."""
        return cls(limits=ParseLimits(), **config_options)

    @property
    def skip_unknown_characters(self) -> bool:
        """Whether the tokenizer skips characters that start no token."""
        return self.behavior.skip_unknown_characters

    @skip_unknown_characters.setter
    def skip_unknown_characters(self, value: bool) -> None:
        self.behavior.skip_unknown_characters = value

    @property
    def include_position(self) -> bool:
        return self.error_reporting.include_position

    @include_position.setter
    def include_position(self, value: bool) -> None:
        self.error_reporting.include_position = value

    @property
    def include_context(self) -> bool:
        """Whether errors carry the offending source line and a caret."""
        return self.error_reporting.include_context

    @include_context.setter
    def include_context(self, value: bool) -> None:
        self.error_reporting.include_context = value

    @property
    def max_error_context(self) -> int:
        return self.error_reporting.max_error_context

    @max_error_context.setter
    def max_error_context(self, value: int) -> None:
        self.error_reporting.max_error_context = value
