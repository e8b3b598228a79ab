"""Configuration data models for mado.

Every model forbids unknown keys so that a typo in a config file is a
configuration error instead of a silently ignored setting. Keys may be
written in snake_case or kebab-case (``line_length`` / ``line-length``).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class _Section(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=_kebab,
        populate_by_name=True,
    )


class OutputFormat(StrEnum):
    """How diagnostics are rendered."""

    CONCISE = "concise"
    MDL = "mdl"
    MARKDOWNLINT = "markdownlint"
    JSON = "json"


class HeadingStyle(StrEnum):
    CONSISTENT = "consistent"
    ATX = "atx"
    ATX_CLOSED = "atx-closed"
    SETEXT = "setext"
    SETEXT_WITH_ATX = "setext-with-atx"


class ListStyle(StrEnum):
    CONSISTENT = "consistent"
    ASTERISK = "asterisk"
    PLUS = "plus"
    DASH = "dash"
    SUBLIST = "sublist"


class OrderedListStyle(StrEnum):
    ONE = "one"
    ORDERED = "ordered"


class CodeBlockStyle(StrEnum):
    FENCED = "fenced"
    INDENTED = "indented"
    CONSISTENT = "consistent"


DEFAULT_PUNCTUATION = ".,;:!?"


class HeadingLevelConfig(_Section):
    """Shared shape of the ``md002``, ``md025`` and ``md041`` tables."""

    level: int = Field(default=1, ge=1, le=6)


class MD003Config(_Section):
    style: HeadingStyle = HeadingStyle.CONSISTENT


class MD004Config(_Section):
    style: ListStyle = ListStyle.CONSISTENT


class MD007Config(_Section):
    indent: int = Field(default=4, ge=1)


class MD013Config(_Section):
    """Line length threshold and the regions it applies to.

    Attributes
    ----------
    line_length : int, default=80
        Longest allowed line
    code_blocks : bool, default=True
        Check lines inside code blocks
    tables : bool, default=True
        Check lines inside tables
    """

    line_length: int = Field(default=80, ge=1)
    code_blocks: bool = True
    tables: bool = True


class PunctuationConfig(_Section):
    """Shared shape of the ``md026`` and ``md036`` tables."""

    punctuation: str = DEFAULT_PUNCTUATION


class MD029Config(_Section):
    style: OrderedListStyle = OrderedListStyle.ONE


class MD030Config(_Section):
    """Spaces after list markers, for single- and multi-paragraph lists."""

    ul_single: int = Field(default=1, ge=1)
    ol_single: int = Field(default=1, ge=1)
    ul_multi: int = Field(default=1, ge=1)
    ol_multi: int = Field(default=1, ge=1)


class MD033Config(_Section):
    allowed_elements: list[str] = Field(default_factory=list)

    @field_validator("allowed_elements")
    @classmethod
    def _lowercase(cls, value: list[str]) -> list[str]:
        return [element.lower() for element in value]


class MD035Config(_Section):
    """``consistent`` or the literal thematic break every rule must use (e.g. ``***``)."""

    style: str = "consistent"

    @field_validator("style")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("style must be 'consistent' or a thematic break such as '---'")
        return value.strip()


class MD046Config(_Section):
    style: CodeBlockStyle = CodeBlockStyle.FENCED


class LintConfig(_Section):
    """The ``[lint]`` table.

    Attributes
    ----------
    output_format : OutputFormat, default="concise"
        Diagnostic renderer, spelled ``output-format`` in files
    rules : list[str] | None, default=None
        Enabled rule names or aliases in execution order; ``None`` enables
        every rule
    """

    output_format: OutputFormat = OutputFormat.CONCISE
    rules: list[str] | None = None

    md002: HeadingLevelConfig = Field(default_factory=HeadingLevelConfig)
    md003: MD003Config = Field(default_factory=MD003Config)
    md004: MD004Config = Field(default_factory=MD004Config)
    md007: MD007Config = Field(default_factory=MD007Config)
    md013: MD013Config = Field(default_factory=MD013Config)
    md025: HeadingLevelConfig = Field(default_factory=HeadingLevelConfig)
    md026: PunctuationConfig = Field(default_factory=PunctuationConfig)
    md029: MD029Config = Field(default_factory=MD029Config)
    md030: MD030Config = Field(default_factory=MD030Config)
    md033: MD033Config = Field(default_factory=MD033Config)
    md035: MD035Config = Field(default_factory=MD035Config)
    md036: PunctuationConfig = Field(default_factory=PunctuationConfig)
    md041: HeadingLevelConfig = Field(default_factory=HeadingLevelConfig)
    md046: MD046Config = Field(default_factory=MD046Config)


class LoggingConfig(_Section):
    """The ``[logging]`` table; ``MADO_LOG_LEVEL``/``MADO_LOG_FORMAT`` override it."""

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "structured", "rich"] = "structured"


class MadoConfig(_Section):
    """Root configuration object."""

    lint: LintConfig = Field(default_factory=LintConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
