#!/usr/bin/env python3
"""
formathub - CSS beautifier/minifier and line diff checker

Command-line front end for the formathub pipelines. Reads input files from
inputdir, runs the selected tool, and writes the result to outputdir.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Tools:
    css   Beautify or minify a stylesheet, reporting structural issues
    diff  Compare two text files line by line (or two JSON files structurally)

Usage:
    formathub inputdir/ outputdir/ --tool css --inputFile style.css
    formathub inputdir/ outputdir/ --tool diff --inputFile old.txt --compareFile new.txt

Examples:
    # Minify a stylesheet
    formathub . out/ --tool css --inputFile site.css --mode minify

    # Beautify with tabs, sorted declarations, and a highlighted HTML copy
    formathub . out/ --tool css --inputFile site.css --indentType tabs --sortProperties --html

    # Side-by-side diff ignoring whitespace
    formathub . out/ --tool diff --inputFile a.txt --compareFile b.txt --diffType split --ignoreWhitespace

    # Structural JSON comparison with options from a preset
    formathub . out/ --tool diff --inputFile a.json --compareFile b.json --compareMode json --presetFile team.yaml
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import Any, Dict

from chris_plugin import chris_plugin
from .lib import css_process, diff_compute, __version__, LOG, state_connectToLogger
from .lib.lexer import html_highlight
from .lib.log import WARN
from .lib.preset import Preset, PresetError
from .models import ProgramState, pipeline, CssResult


DISPLAY_TITLE = r"""
   __                           _   _           _
  / _| ___  _ __ _ __ ___   __ _| |_| |__  _   _| |__
 | |_ / _ \| '__| '_ ` _ \ / _` | __| '_ \| | | | '_ \
 |  _| (_) | |  | | | | | | (_| | |_| | | | |_| | |_) |
 |_|  \___/|_|  |_| |_| |_|\__,_|\__|_| |_|\__,_|_.__/

  CSS beautifier/minifier and line diff checker
"""

# Define CLI arguments
parser = ArgumentParser(
    description="formathub - CSS beautifier/minifier and line diff checker",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--tool", choices=["css", "diff"], default="css", help="Tool to run"
)

parser.add_argument(
    "--inputFile", required=True, type=str,
    help="Stylesheet (css) or left-hand file (diff), relative to inputdir",
)

parser.add_argument(
    "--compareFile", default=None, type=str,
    help="Right-hand file for --tool diff, relative to inputdir",
)

parser.add_argument(
    "--outputFile", default="", type=str,
    help="Output filename within outputdir. Derived from inputFile when empty",
)

parser.add_argument(
    "--presetFile", default=None, type=str,
    help="YAML preset of tool options (relative to inputdir)",
)

parser.add_argument(
    "--html", action="store_true", help="Also write a syntax-highlighted HTML rendering"
)

# CSS options
parser.add_argument("--mode", choices=["beautify", "minify"], default=None, help="CSS output mode")
parser.add_argument("--indentSize", type=int, default=None, help="Spaces per indentation level")
parser.add_argument("--indentType", choices=["spaces", "tabs"], default=None, help="Indentation character")
parser.add_argument("--sortProperties", action="store_true", help="Sort declarations by property name")
parser.add_argument("--removeEmptyRules", action="store_true", help="Drop rules without declarations")
parser.add_argument("--stripComments", action="store_true", help="Remove comments from the output")

# Diff options
parser.add_argument("--diffType", choices=["unified", "split", "inline"], default=None, help="Diff output format")
parser.add_argument("--contextLines", type=int, default=None, help="Unchanged lines around unified hunks")
parser.add_argument("--compareMode", choices=["text", "json"], default=None, help="Line diff or JSON structure")
parser.add_argument("--ignoreWhitespace", action="store_true", help="Collapse whitespace before comparing")
parser.add_argument("--ignoreCase", action="store_true", help="Compare lines case-insensitively")
parser.add_argument("--noLineNumbers", action="store_true", help="Omit line-number columns")
parser.add_argument("--noStats", action="store_true", help="Omit the statistics block")

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def outputName_derive(state: ProgramState) -> str:
    """
    Default output filename for the selected tool

    Example:
        site.css, beautify -> site.formatted.css
        site.css, minify   -> site.min.css
        old.txt, diff      -> old.diff.txt
    """
    stem = Path(state.inputFile).stem
    if state.tool == "diff":
        return f"{stem}.diff.txt"
    if state.mode == "minify":
        return f"{stem}.min.css"
    return f"{stem}.formatted.css"


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Verifies that the input file(s) exist, then creates the output directory.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the input file
            - compareSourceFile: Resolved path to the right-hand file (diff)
            - outputTarget: Path of the output file
            - envOK: True if environment is valid

    Exits:
        1 if an input file is missing
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    if state.tool == "diff":
        if not state.compareFile:
            print("Error: --tool diff requires --compareFile", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        compare_file = state.inputdir / state.compareFile
        if not compare_file.exists():
            print(f"Error: Compare file not found: {compare_file}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        state.compareSourceFile = compare_file
        LOG(f"Compare file: {compare_file}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    state.outputTarget = state.outputdir / (state.outputFile or outputName_derive(state))
    LOG(f"Output file: {state.outputTarget}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the input file(s).

    Args:
        inputstate: Program state with resolved input paths

    Returns:
        ProgramState with added fields:
            - sourceText: Contents of inputFile
            - compareText: Contents of compareFile (diff only)

    Exits:
        1 if a file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading input...", level=1)

    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
        LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
        if state.compareSourceFile is not None:
            state.compareText = state.compareSourceFile.read_text(encoding="utf-8")
            LOG(f"Read {len(state.compareText)} characters from {state.compareSourceFile.name}", level=2)
    except Exception as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    return state


def cssOverrides_collect(state: ProgramState) -> Dict[str, Any]:
    """CSS options given explicitly on the command line"""
    overrides: Dict[str, Any] = {}
    if state.mode is not None:
        overrides["mode"] = state.mode
    if state.indentSize is not None:
        overrides["indent_size"] = state.indentSize
    if state.indentType is not None:
        overrides["indent_type"] = state.indentType
    if state.sortProperties:
        overrides["sort_declarations"] = True
    if state.removeEmptyRules:
        overrides["drop_empty_rules"] = True
    if state.stripComments:
        overrides["preserve_comments"] = False
    return overrides


def diffOverrides_collect(state: ProgramState) -> Dict[str, Any]:
    """Diff options given explicitly on the command line"""
    overrides: Dict[str, Any] = {}
    if state.diffType is not None:
        overrides["diff_type"] = state.diffType
    if state.contextLines is not None:
        overrides["context_lines"] = state.contextLines
    if state.compareMode is not None:
        overrides["compare_mode"] = state.compareMode
    if state.ignoreWhitespace:
        overrides["ignore_whitespace"] = True
    if state.ignoreCase:
        overrides["ignore_case"] = True
    if state.noLineNumbers:
        overrides["show_line_numbers"] = False
    if state.noStats:
        overrides["show_stats"] = False
    return overrides


def tool_run(inputstate: ProgramState) -> ProgramState:
    """
    Build the tool options and run the selected pipeline.

    Options come from the preset file (if any) overlaid with CLI flags.

    Args:
        inputstate: Program state with sourceText (and compareText)

    Returns:
        ProgramState with added field:
            - toolResult: CssResult or DiffResult

    Exits:
        1 if the preset is invalid or the tool reports a failure
    """

    state = inputstate.copy()

    try:
        preset = Preset(state.inputdir / state.presetFile if state.presetFile else None)
        if state.tool == "css":
            css_config = preset.cssConfig_build(cssOverrides_collect(state))
            LOG(f"Processing stylesheet ({css_config.mode})...", level=1)
            state.toolResult = css_process(state.sourceText, css_config)
        else:
            diff_config = preset.diffConfig_build(diffOverrides_collect(state))
            LOG(f"Comparing files ({diff_config.compare_mode}, {diff_config.diff_type})...", level=1)
            state.toolResult = diff_compute(state.sourceText, state.compareText, diff_config)
    except PresetError as e:
        print(f"Preset error: {e}", file=sys.stderr)
        sys.exit(1)

    if not state.toolResult.success:
        print(f"Error: {state.toolResult.error}", file=sys.stderr)
        sys.exit(1)

    if isinstance(state.toolResult, CssResult):
        for issue in state.toolResult.stats.errors + state.toolResult.stats.warnings:
            WARN(str(issue))

    return state


def output_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the tool output, plus an HTML rendering when --html is set.

    Returns:
        ProgramState with added field:
            - writtenFiles: Paths written

    Exits:
        1 if writing fails
    """

    state = inputstate.copy()
    state.writtenFiles = []

    try:
        state.outputTarget.write_text(state.toolResult.output, encoding="utf-8")
        state.writtenFiles.append(state.outputTarget)
        LOG(f"Wrote {state.outputTarget}", level=2)

        if state.html:
            if state.tool == "css":
                language = "css"
            elif state.toolResult.stats is None:
                language = "text"
            else:
                language = "diff"
            html_file = state.outputTarget.with_name(state.outputTarget.name + ".html")
            html_file.write_text(
                html_highlight(state.toolResult.output, language, title=state.inputFile),
                encoding="utf-8",
            )
            state.writtenFiles.append(html_file)
            LOG(f"Wrote {html_file}", level=2)
    except Exception as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display a summary of the run.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()
    result = state.toolResult

    LOG("\n✓ Done!", level=1)
    for written in state.writtenFiles:
        LOG(f"  Output: {written}", level=1)

    if isinstance(result, CssResult):
        stats = result.stats
        LOG(f"  Rules: {stats.rule_count}, declarations: {stats.declaration_count}", level=1)
        LOG(f"  Size: {stats.original_size} -> {stats.processed_size} bytes "
            f"({stats.compression_ratio:.0%})", level=1)
        LOG(f"  Issues: {len(stats.errors)} errors, {len(stats.warnings)} warnings", level=1)
    elif result.stats is not None:
        stats = result.stats
        LOG(f"  +{stats.lines_added} -{stats.lines_deleted} ={stats.lines_unchanged} "
            f"(similarity {stats.similarity}%)", level=1)
    else:
        LOG(f"  Structural differences: {len(result.json_changes)}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="formathub - CSS beautifier/minifier and line diff checker",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - run the selected tool over files in inputdir.

    Orchestrates the pipeline:
        1. env_check: Validate paths and environment
        2. source_read: Read input file(s)
        3. tool_run: Build options and run css_process / diff_compute
        4. output_write: Write output (and HTML rendering)
        5. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing input files
        outputdir: Directory where results will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_read, tool_run, output_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
