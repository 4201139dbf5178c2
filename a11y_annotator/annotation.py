"""
Force-read annotations.

A sentinel is a <span> carrying the annotation text, the class
force-read-before or force-read-after, and a link attribute whose value is
the id of the annotated element. A sentinel with the same link attribute
value and side that is already in the tree gets the new text instead of a
second sentinel, so running an annotation twice replaces stale text instead
of piling it up.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from .dom import CLASS_FORCE_READ_AFTER, CLASS_FORCE_READ_BEFORE, find_by_attribute
from .identifiers import IdentifierAllocator
from .insertion import InsertionPlanner, Position

logger = logging.getLogger(__name__)


class AnnotationWriter:
    """Writes and replaces linked sentinel text around target elements."""

    def __init__(self, document: BeautifulSoup, allocator: IdentifierAllocator,
                 planner: Optional[InsertionPlanner] = None):
        self.document = document
        self.allocator = allocator
        self.planner = planner or InsertionPlanner(document)

    def force_read(self, target: Tag, text_before: str, text_after: str,
                   link_attribute: str) -> None:
        """
        Make assistive technology read text before and/or after target.

        Args:
            target: The annotated element
            text_before: Text for the before sentinel ('' skips that side)
            text_after: Text for the after sentinel ('' skips that side)
            link_attribute: data-* attribute linking the sentinels to target
        """
        if _is_blank(text_before) and _is_blank(text_after):
            return

        identifier = self.allocator.ensure_id(target)
        if not _is_blank(text_before):
            self._write(target, identifier, text_before, link_attribute, Position.BEFORE)
        if not _is_blank(text_after):
            self._write(target, identifier, text_after, link_attribute, Position.AFTER)

    def force_read_templated(self, target: Tag, value: str,
                             prefix_before: str, suffix_before: str,
                             prefix_after: str, suffix_after: str,
                             link_attribute: str) -> None:
        """Wrap value in the configured prefix/suffix of each side and force-read it."""
        text_before = ''
        text_after = ''
        if prefix_before or suffix_before:
            text_before = f'{prefix_before}{value}{suffix_before}'
        if prefix_after or suffix_after:
            text_after = f'{prefix_after}{value}{suffix_after}'
        self.force_read(target, text_before, text_after, link_attribute)

    def _write(self, target: Tag, identifier: str, text: str,
               link_attribute: str, position: Position) -> None:
        class_name = CLASS_FORCE_READ_BEFORE if position is Position.BEFORE else CLASS_FORCE_READ_AFTER

        # Rewrite in place so sibling sentinels keep their order
        existing = find_by_attribute(self.document, link_attribute, identifier, class_name)
        if existing:
            for sentinel in existing:
                sentinel.string = text
            return

        sentinel = self.document.new_tag('span')
        sentinel['class'] = class_name
        sentinel[link_attribute] = identifier
        sentinel.string = text

        if not self.planner.place(target, sentinel, position):
            logger.debug(f"Annotation {link_attribute} for #{identifier} has no insertion point")


def _is_blank(text: Optional[str]) -> bool:
    return not text or not text.strip()
