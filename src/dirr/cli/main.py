"""Command-line interface for dirr.

This module ties argument parsing, the streaming lister and signal-aware output
together, and translates errors into messages on stderr and exit codes.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution (including an unreadable root directory)
    2: Command-line syntax error (including an invalid exclusion pattern)
    126: Permission denied on a subdirectory with -P fail
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # List the current directory with metadata, skipping anything named like tmp
    $ dirr -m . -x tmp
"""

import sys
from collections.abc import Mapping
from typing import List, Optional

from dirr.cli.argparser import create_parser, validate_args
from dirr.cli.safe_writer import SafeWriter
from dirr.cli.signal_handler import setup_signal_handling, signal_handler
from dirr.dirr import StreamingDirr
from dirr.exclusion_rules.base_rules import BaseExclusionRules
from dirr.exclusion_rules.composite_rules import CompositeExclusionRules
from dirr.exclusion_rules.git_rules import GitIgnoreExclusionRules
from dirr.exclusion_rules.pattern_rules import PatternExclusionRules
from dirr.file_system_tree.permission_action import PermissionAction


def format_counts(counts: Mapping[str, int]) -> str:
    """Format the counts into a human-readable string.

    Example:
        >>> print(format_counts({"directories": 2, "files": 5}))
        Directories: 2
        Files: 5
    """
    return "\n".join(
        [
            f"Directories: {counts['directories']}",
            f"Files: {counts['files']}",
        ]
    )


def combine_rules(
    pattern_rules: PatternExclusionRules, gitignore_rules: GitIgnoreExclusionRules
) -> Optional[BaseExclusionRules]:
    """Combine the configured rule objects, dropping empty ones.

    Returns:
        None if no rules are configured, the single configured rule object, or a
        CompositeExclusionRules over both.
    """
    configured: List[BaseExclusionRules] = [rules for rules in (pattern_rules, gitignore_rules) if rules.has_rules()]
    if not configured:
        return None
    if len(configured) == 1:
        return configured[0]
    return CompositeExclusionRules(configured)


def main() -> None:
    """Main entry point for the dirr command-line interface."""
    setup_signal_handling()

    try:
        pattern_rules = PatternExclusionRules()
        gitignore_rules = GitIgnoreExclusionRules()

        # Invalid patterns end parsing with exit code 2 before anything is listed
        parser = create_parser(pattern_rules, gitignore_rules)
        args = parser.parse_args()
        validate_args(args)

        perm_action = {
            "ignore": PermissionAction.IGNORE,
            "fail": PermissionAction.RAISE,
        }[args.permission_action]

        lister = StreamingDirr(
            args.directory,
            exclusion_rules=combine_rules(pattern_rules, gitignore_rules),
            show_metadata=args.meta,
            permission_action=perm_action,
            sort_entries=args.sort,
        )

        output_file = args.output if args.output else sys.stdout.fileno()

        try:
            with SafeWriter(output_file) as safe_writer:
                try:
                    for line in lister.stream_listing():
                        safe_writer.write(line)

                    if args.summary:
                        count_output_str = format_counts(
                            {"directories": lister.directory_count, "files": lister.file_count}
                        )
                        if args.summary in ("stdout", "file"):
                            safe_writer.write("\n" + count_output_str + "\n")
                        else:
                            print(count_output_str, file=sys.stderr)

                except BrokenPipeError:
                    pass  # SafeWriter will automatically close in the context manager

        except PermissionError as e:
            print(f"Error: {str(e)}", file=sys.stderr)
            sys.exit(126)

    except Exception as e:
        # Includes RootAccessError for a missing or unreadable root
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
