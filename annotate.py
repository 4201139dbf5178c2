#!/usr/bin/env python3
"""
Accessibility Annotator - Convenience CLI Script

Annotate an HTML page so screen readers announce states, shortcuts and
navigation aids.

Usage:
    python annotate.py input.html [options]

Options:
    -o, --output FILE         Output file (default: <input>.a11y.html)
    --config FILE             JSON annotation texts
    --skippers FILE           JSON skip link definitions
    --user-agent UA           Browser the shortcut keys are shown for
    --no-skippers             Do not add skip links
    --no-headings             Do not build the heading outline
    --no-long-descriptions    Do not link long descriptions
    --no-states               Do not annotate states
    -v, --verbose             Verbose output
    --version                 Show version

Examples:
    python annotate.py page.html
    python annotate.py page.html -o accessible/page.html
    python annotate.py page.html --config pt-br.json --user-agent "Mozilla/5.0 (Windows NT 10.0) Firefox/120.0"
"""

import sys
from pathlib import Path

# Add package to path if running directly
package_dir = Path(__file__).parent
if str(package_dir) not in sys.path:
    sys.path.insert(0, str(package_dir))

from a11y_annotator.cli import main

if __name__ == '__main__':
    sys.exit(main())
