#!/usr/bin/env python3
"""
Accessibility Annotator CLI

Command-line interface for annotating HTML pages for screen readers.

Usage:
    python -m a11y_annotator input.html [options]
    a11y-annotate input.html [options]
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .annotator import AccessibilityAnnotator, AnnotationOptions
from .configuration import ConfigurationError, load_configuration


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )


def parse_args(args: list = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='a11y-annotate',
        description='Annotate HTML pages so screen readers announce states, shortcuts and navigation aids',
        epilog='Example: a11y-annotate page.html -o page.accessible.html'
    )

    parser.add_argument(
        'input',
        type=str,
        help='Path to input HTML file'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output file (default: <input>.a11y.html)'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='JSON file with annotation texts (default: bundled English texts)'
    )

    parser.add_argument(
        '--skippers',
        type=str,
        default=None,
        help='JSON file with skip link definitions (default: bundled skippers)'
    )

    parser.add_argument(
        '--user-agent',
        type=str,
        default=None,
        help='Browser user agent, selects the shortcut keys shown to users'
    )

    # Feature toggles
    parser.add_argument(
        '--no-skippers',
        action='store_true',
        help='Do not add skip links'
    )

    parser.add_argument(
        '--no-headings',
        action='store_true',
        help='Do not build the heading outline'
    )

    parser.add_argument(
        '--no-long-descriptions',
        action='store_true',
        help='Do not link long descriptions of images'
    )

    parser.add_argument(
        '--no-states',
        action='store_true',
        help='Do not annotate ARIA states, roles, titles and shortcuts'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser.parse_args(args)


def main(args: list = None) -> int:
    """
    Main entry point for CLI.

    Args:
        args: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parsed = parse_args(args)
    setup_logging(parsed.verbose)

    logger = logging.getLogger(__name__)

    # Validate input
    input_path = Path(parsed.input)
    if not input_path.exists():
        logger.error(f"Input file not found: {input_path}")
        return 1

    if input_path.suffix.lower() not in ('.html', '.htm', '.xhtml'):
        logger.warning(f"Input file may not be HTML: {input_path}")

    if parsed.output:
        output_path = Path(parsed.output)
    else:
        output_path = input_path.with_suffix('.a11y.html')

    try:
        configuration = load_configuration(parsed.config, parsed.skippers)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    options = AnnotationOptions(
        add_skippers=not parsed.no_skippers,
        add_heading_outline=not parsed.no_headings,
        link_long_descriptions=not parsed.no_long_descriptions,
        annotate_states=not parsed.no_states,
        user_agent=parsed.user_agent,
    )

    logger.info(f"Annotating: {input_path}")
    try:
        with open(input_path, 'r', encoding='utf-8') as f:
            html = f.read()
        annotator = AccessibilityAnnotator(configuration)
        annotated = annotator.annotate(html, options)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(annotated)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Annotation failed: {e}")
        return 1

    report = annotator.report
    print(f"\nAnnotation successful!")
    print(f"  Output:            {output_path}")
    print(f"  Skip links:        {report.skippers_added}")
    print(f"  Outline entries:   {report.headings_added}")
    print(f"  Long descriptions: {report.long_descriptions_linked}")
    print(f"  Annotated:         {report.elements_annotated} elements")
    return 0


if __name__ == '__main__':
    sys.exit(main())
