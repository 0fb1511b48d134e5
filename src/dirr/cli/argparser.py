"""Command-line argument parsing for dirr.

This module defines the command-line interface for dirr, handling argument
parsing and validation. Exclusion patterns are compiled while the arguments are
parsed, so an invalid pattern is reported before the directory is touched.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from dirr import __version__
from dirr.exceptions import InvalidPatternError
from dirr.exclusion_rules.git_rules import GitIgnoreExclusionRules
from dirr.exclusion_rules.pattern_rules import PatternExclusionRules


def create_exclusion_action(
    pattern_rules: PatternExclusionRules, gitignore_rules: GitIgnoreExclusionRules
) -> Type[argparse.Action]:
    """Create a custom action class that feeds exclusion options into rule objects.

    Patterns given with -x/--exclude are compiled into ``pattern_rules``; files given
    with -e/--exclude-from are loaded into ``gitignore_rules``.

    Args:
        pattern_rules: Component pattern rules to update during parsing.
        gitignore_rules: Gitignore rules to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        """Action to update exclusion rules as arguments are processed."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return
            if isinstance(values, (str, Path)):
                values = [values]

            if option_string in ("-e", "--exclude-from"):
                for rules_file in values:
                    try:
                        gitignore_rules.load_rules(rules_file)
                    except FileNotFoundError as e:
                        parser.error(str(e))
            else:  # -x/--exclude
                # Compile the whole batch before adding any of it
                try:
                    compiled = PatternExclusionRules([str(value) for value in values])
                except InvalidPatternError as e:
                    parser.error(str(e))
                pattern_rules.patterns.extend(compiled.patterns)

            # Keep the raw values on the namespace as well
            existing = getattr(namespace, self.dest, None) or []
            setattr(namespace, self.dest, existing + list(values))

    return ExclusionRulesAction


def create_parser(
    pattern_rules: PatternExclusionRules, gitignore_rules: GitIgnoreExclusionRules
) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        pattern_rules: Component pattern rules to update during parsing.
        gitignore_rules: Gitignore rules to update during parsing.

    Returns:
        An ArgumentParser instance configured with dirr's options.
    """
    description = """
    dirr: A simple directory listing tool with exclusions and metadata support.

    Lists every file and directory below DIRECTORY depth-first, one entry per line,
    indented by depth. Entries can be excluded by pattern, in which case excluded
    directories are not descended into at all.
    """

    epilog = """
    Examples:
      # List the current directory
      dirr

      # Show file size and modification time alongside each entry
      dirr -m /path/to/project

      # Exclude every entry with 'tmp' anywhere in one of its path components
      dirr /path/to/project -x tmp
      dirr /path/to/project -x '*tmp*'

      # Several patterns; regex syntax is accepted ('*' always means '.*')
      dirr -m /path/to/project -x node_modules '^\\.git$'

      # Also apply .gitignore rules
      dirr -e .gitignore /path/to/project

      # Write the listing to a file and print a summary to stderr
      dirr -o listing.txt -s stderr /path/to/project

      # Display version information and exit
      dirr --version
    """

    parser = argparse.ArgumentParser(
        prog="dirr",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"dirr {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(pattern_rules, gitignore_rules)

    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=Path("."),
        help="The directory to list (default: the current directory).",
    )
    parser.add_argument(
        "-m",
        "--meta",
        action="store_true",
        help="Show metadata (file size and modified time) alongside the directory listing.",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        nargs="+",
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Exclude entries any of whose path components matches PATTERN. Supports regex patterns; "
            "'*' is translated to '.*'. Takes every following argument as a pattern, so give the "
            "directory first. Can be specified multiple times."
        ),
    )
    parser.add_argument(
        "-e",
        "--exclude-from",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="Path to a .gitignore-style file of exclusion rules (can be specified multiple times).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        help="Sort entries by name within each directory instead of using filesystem order.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout", "file"],
        help="Print summary report. Valid destinations: stderr, stdout, file (requires -o)",
    )
    parser.add_argument(
        "-P",
        "--permission-action",
        choices=["ignore", "fail"],
        default="ignore",
        help="How to handle unreadable subdirectories (default: ignore).",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments beyond what argparse can handle.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.summary == "file" and not args.output:
        raise ValueError("--summary=file requires -o/--output to be specified")
