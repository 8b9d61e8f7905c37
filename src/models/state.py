"""
CLI state bus

ProgramState carries the command-line options and every intermediate result
through the formathub stages; pipeline() composes those stages.
"""

from pathlib import Path
from argparse import Namespace
from functools import reduce
from typing import Optional, Type, TypeVar, Callable, Union
from dataclasses import dataclass, field, fields, replace

from .results import CssResult, DiffResult


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Options and intermediate results of one formathub run.

    Stages never mutate their input; each copies the state and fills in
    its own fields:
        - Initial: inputdir, outputdir, verbosity, tool, inputFile, compareFile,
          outputFile, html, presetFile, plus the per-tool CLI options
        - env_check: inputSourceFile, compareSourceFile, outputTarget, envOK
        - source_read: sourceText, compareText
        - tool_run: toolResult (options from preset file and CLI)
        - output_write: writtenFiles
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the input file(s)
        outputdir: Base output directory
        verbosity: Logging verbosity level (1-3)
        tool: "css" or "diff"
        inputFile: Stylesheet, or left-hand text for diff (relative to inputdir)
        compareFile: Right-hand text for diff (relative to inputdir)
        outputFile: Output filename within outputdir (derived when empty)
        html: Also write a syntax-highlighted HTML rendering
        presetFile: Optional YAML file of option defaults
        toolResult: CssResult or DiffResult from the tool stage
        writtenFiles: Paths written by output_write
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    tool: str = field(default="css")
    inputFile: str = field(default="")
    compareFile: Optional[str] = field(default=None)
    outputFile: str = field(default="")
    html: bool = field(default=False)
    presetFile: Optional[str] = field(default=None)

    # CSS options (None means "not given on the command line")
    mode: Optional[str] = field(default=None)
    indentSize: Optional[int] = field(default=None)
    indentType: Optional[str] = field(default=None)
    sortProperties: bool = field(default=False)
    removeEmptyRules: bool = field(default=False)
    stripComments: bool = field(default=False)

    # Diff options
    diffType: Optional[str] = field(default=None)
    contextLines: Optional[int] = field(default=None)
    compareMode: Optional[str] = field(default=None)
    ignoreWhitespace: bool = field(default=False)
    ignoreCase: bool = field(default=False)
    noLineNumbers: bool = field(default=False)
    noStats: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    compareSourceFile: Optional[Path] = field(default=None)
    outputTarget: Path = field(default=Path("/"))
    sourceText: str = field(default="")
    compareText: str = field(default="")
    toolResult: Optional[Union[CssResult, DiffResult]] = field(default=None)
    writtenFiles: list = field(default_factory=list)

    @classmethod
    def state_createFromNamespace(
        cls: Type[PS], options: Namespace, inputdir: Path, outputdir: Path
    ) -> PS:
        """
        Build the initial state from parsed CLI options.

        Options without a matching field (flags added by the ChRIS plugin
        wrapper, for instance) are dropped.

        Args:
            options: argparse result (tool, inputFile, mode, diffType, ...)
            inputdir: Directory holding inputFile, compareFile and presetFile
            outputdir: Directory receiving the output file(s)
        """
        known = {f.name for f in fields(cls)}
        given = {name: value for name, value in vars(options).items() if name in known}
        return cls(**{**given, "inputdir": inputdir, "outputdir": outputdir})

    def copy(self: PS) -> PS:
        """Shallow copy, so a stage never mutates its input state"""
        return replace(self)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Thread a state through stages left to right.

    Example:
        final_state = pipeline(state, env_check, source_read, tool_run,
                               output_write, results_report)
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
