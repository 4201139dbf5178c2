"""
Accessibility Annotator

Post-processor that makes the implicit state of an HTML page explicit for
screen readers.

Features:
- Heading outline with anchors to every heading (when the structure is sound)
- Skip links to configured page regions, with keyboard shortcuts
- Links to the long descriptions of images
- Spoken annotations for ARIA states, roles, titles, languages, table
  headers, shortcuts, downloads and links opening a new window

Every feature can run repeatedly on the same document without duplicating
what an earlier run produced.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup, Tag

from .annotation import AnnotationWriter
from .configuration import Configuration, load_configuration
from .headings import HeadingOutlineBuilder
from .identifiers import DEFAULT_PREFIX, IdentifierAllocator
from .insertion import InsertionPlanner
from .long_descriptions import LongDescriptionLinker
from .shortcuts import ShortcutLister, ShortcutResolver
from .skippers import SkipperBuilder
from .states import StateAnnotator

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class AnnotationOptions:
    """Which features an annotation run applies."""
    add_skippers: bool = True
    add_heading_outline: bool = True
    link_long_descriptions: bool = True
    annotate_states: bool = True
    # Browser the page is prepared for, selects the shortcut modifier keys
    user_agent: Optional[str] = None


@dataclass
class AnnotationReport:
    """Counts from one annotation run."""
    skippers_added: int = 0
    headings_added: int = 0
    long_descriptions_linked: int = 0
    elements_annotated: int = 0


# =============================================================================
# Engine
# =============================================================================

class AnnotationEngine:
    """
    All annotation features bound to one parsed document.

    The drivers share a single identifier allocator, insertion planner and
    annotation writer, so ids stay unique across features.

    Usage:
        soup = BeautifulSoup(html, 'html.parser')
        engine = AnnotationEngine(soup, load_configuration())
        engine.build_heading_outline()
        engine.annotate_all_states()
    """

    def __init__(self, document: BeautifulSoup, configuration: Configuration,
                 user_agent: Optional[str] = None):
        self.document = document
        self.configuration = configuration

        prefix = configuration.text('prefix-generated-ids') or DEFAULT_PREFIX
        self.allocator = IdentifierAllocator(document, prefix)
        self.planner = InsertionPlanner(document)
        self.writer = AnnotationWriter(document, self.allocator, self.planner)
        self.resolver = ShortcutResolver(document)

        self.shortcuts = ShortcutLister(document, configuration, self.writer, user_agent)
        self.states = StateAnnotator(document, configuration, self.writer, self.shortcuts)
        self.headings = HeadingOutlineBuilder(document, configuration, self.allocator, self.planner)
        self.skippers = SkipperBuilder(document, configuration, self.allocator,
                                       self.planner, self.resolver)
        self.long_descriptions = LongDescriptionLinker(document, configuration,
                                                       self.allocator, self.planner)

    # Batch operations

    def annotate_all_states(self, attributes: Optional[Iterable[str]] = None) -> int:
        return self.states.annotate_all(attributes)

    def build_heading_outline(self) -> int:
        return self.headings.provide_for_all()

    def build_all_skippers(self) -> int:
        return self.skippers.provide_for_all()

    def link_all_long_descriptions(self) -> int:
        return self.long_descriptions.link_all()

    # Single element operations

    def annotate_state(self, element: Tag, attributes: Optional[Iterable[str]] = None) -> None:
        self.states.annotate(element, attributes)

    def add_heading(self, heading: Tag) -> Optional[Tag]:
        return self.headings.provide_for(heading)

    def add_skipper(self, element: Tag) -> Optional[Tag]:
        return self.skippers.provide_for(element)

    def link_long_description(self, image: Tag) -> List[Tag]:
        return self.long_descriptions.link(image)


# =============================================================================
# Main Annotator Class
# =============================================================================

class AccessibilityAnnotator:
    """
    Annotates HTML strings for screen readers.

    Usage:
        annotator = AccessibilityAnnotator()
        annotated_html = annotator.annotate(html_content, AnnotationOptions())
    """

    def __init__(self, configuration: Optional[Configuration] = None):
        """
        Initialize the annotator.

        Args:
            configuration: Texts and skippers (default: bundled English configuration)
        """
        self.configuration = configuration or load_configuration()
        self.report = AnnotationReport()

    def annotate(self, html: str, options: AnnotationOptions = None) -> str:
        """
        Apply the enabled annotations to HTML.

        The heading outline is built before the skippers, so a skipper can
        target the outline container.

        Args:
            html: Input HTML string
            options: Feature toggles

        Returns:
            Annotated HTML string
        """
        if options is None:
            options = AnnotationOptions()

        soup = BeautifulSoup(html, 'html.parser')
        engine = AnnotationEngine(soup, self.configuration, options.user_agent)
        self.report = AnnotationReport()

        if options.add_heading_outline:
            self.report.headings_added = engine.build_heading_outline()

        if options.add_skippers:
            self.report.skippers_added = engine.build_all_skippers()

        if options.link_long_descriptions:
            self.report.long_descriptions_linked = engine.link_all_long_descriptions()

        if options.annotate_states:
            self.report.elements_annotated = engine.annotate_all_states()

        return str(soup)


def annotate_html(html: str, options: AnnotationOptions = None,
                  configuration: Optional[Configuration] = None) -> str:
    """
    Convenience function to annotate HTML for screen readers.

    Args:
        html: Input HTML string
        options: Optional feature toggles
        configuration: Optional texts and skippers

    Returns:
        Annotated HTML string
    """
    annotator = AccessibilityAnnotator(configuration)
    return annotator.annotate(html, options)


def annotate_html_file(input_path: str, output_path: str = None,
                       options: AnnotationOptions = None,
                       configuration: Optional[Configuration] = None) -> str:
    """
    Annotate an HTML file for screen readers.

    Args:
        input_path: Path to input HTML file
        output_path: Path for output file (default: input.a11y.html)
        options: Optional feature toggles
        configuration: Optional texts and skippers

    Returns:
        Path to output file
    """
    input_path = Path(input_path)
    if output_path is None:
        output_path = input_path.with_suffix('.a11y.html')
    else:
        output_path = Path(output_path)

    with open(input_path, 'r', encoding='utf-8') as f:
        html = f.read()

    annotated = annotate_html(html, options, configuration)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(annotated)

    logger.info(f"Annotated HTML written to {output_path}")
    return str(output_path)
