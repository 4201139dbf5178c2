"""
Accessibility Annotator

Post-processes HTML so that state a sighted user sees, and a screen reader
would otherwise miss, is spoken as text.

Features:
- Spoken ARIA states and properties (checked, expanded, sort order, ...)
- Roles, titles, languages and table header associations read aloud
- Keyboard shortcut announcements and a page-level shortcut list
- Skip links to configured page regions, with conflict-free accesskeys
- Nested heading outline for well-formed documents
- Links to the long descriptions of images
- Idempotent: annotating twice gives the same page

Workflow:
1. Run: python annotate.py page.html
2. The annotated page is written next to it as page.a11y.html
"""

from .configuration import (
    Configuration,
    ConfigurationError,
    Skipper,
    load_configuration,
    load_parameters,
    load_skippers,
)

from .annotator import (
    AccessibilityAnnotator,
    AnnotationEngine,
    AnnotationOptions,
    AnnotationReport,
    annotate_html,
    annotate_html_file,
)

from .identifiers import IdentifierAllocator
from .insertion import InsertionPlanner, Position
from .annotation import AnnotationWriter
from .states import AttributeRule, StateAnnotator
from .shortcuts import ShortcutLister, ShortcutResolver
from .headings import HeadingOutlineBuilder
from .skippers import SkipperBuilder
from .long_descriptions import LongDescriptionLinker

__version__ = '1.0.0'
__all__ = [
    # Annotation
    'AccessibilityAnnotator',
    'AnnotationEngine',
    'AnnotationOptions',
    'AnnotationReport',
    'annotate_html',
    'annotate_html_file',
    # Configuration
    'Configuration',
    'ConfigurationError',
    'Skipper',
    'load_configuration',
    'load_parameters',
    'load_skippers',
    # Components
    'IdentifierAllocator',
    'InsertionPlanner',
    'Position',
    'AnnotationWriter',
    'AttributeRule',
    'StateAnnotator',
    'ShortcutLister',
    'ShortcutResolver',
    'HeadingOutlineBuilder',
    'SkipperBuilder',
    'LongDescriptionLinker',
]
