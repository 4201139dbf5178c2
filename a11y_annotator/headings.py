"""
Heading outline navigation.

Builds a nested <ol> of links to the headings of the page. The outline is
all-or-nothing: if the heading levels are not well formed (more than one
h1, or a level jumping by more than one) no outline and no anchors are
produced, since a wrong outline is worse than none.
"""

import logging
from typing import Iterable, Optional

from bs4 import BeautifulSoup, Tag

from .anchors import generate_anchor_for
from .configuration import Configuration
from .dom import find_body, find_by_id, get_attribute, is_valid_element, normalize_text, own_text
from .identifiers import IdentifierAllocator
from .insertion import InsertionPlanner

logger = logging.getLogger(__name__)

ID_CONTAINER_HEADING = 'container-heading'
ID_TEXT_HEADING = 'text-heading'
CLASS_HEADING_ANCHOR = 'heading-anchor'
DATA_HEADING_LEVEL = 'data-headinglevel'
DATA_HEADING_ANCHOR_FOR = 'data-headinganchorfor'

HEADING_TAGS = ['h1', 'h2', 'h3', 'h4', 'h5', 'h6']
HEADING_SELECTOR = ','.join(HEADING_TAGS)


def heading_level(element: Tag) -> Optional[int]:
    name = (element.name or '').lower()
    if name in HEADING_TAGS:
        return int(name[1])
    return None


def is_valid_heading_sequence(levels: Iterable[int]) -> bool:
    """
    Check a sequence of heading levels in document order.

    Valid means at most one level 1 and no step down the hierarchy by more
    than one level. The level before the first heading counts as 0.
    """
    last_level = 0
    main_headings = 0
    for level in levels:
        if level == 1:
            main_headings += 1
            if main_headings > 1:
                return False
        if level - last_level > 1:
            return False
        last_level = level
    return True


class HeadingOutlineBuilder:
    """Adds anchors to headings and lists them in #container-heading."""

    def __init__(self, document: BeautifulSoup, configuration: Configuration,
                 allocator: IdentifierAllocator, planner: Optional[InsertionPlanner] = None):
        self.document = document
        self.configuration = configuration
        self.allocator = allocator
        self.planner = planner or InsertionPlanner(document)
        self._valid: Optional[bool] = None

    @property
    def valid(self) -> bool:
        if self._valid is None:
            levels = [heading_level(heading) for heading in self.document.select(HEADING_SELECTOR)]
            self._valid = is_valid_heading_sequence(levels)
            if not self._valid:
                logger.info("Heading structure is not well formed, outline disabled")
        return self._valid

    def provide_for(self, heading: Tag) -> Optional[Tag]:
        """
        Add one heading to the outline.

        Returns the new outline item, or None when the outline is disabled,
        the heading is already anchored, or no parent entry exists for it.
        """
        if not self.valid:
            return None

        level = heading_level(heading)
        if level is None:
            return None

        parent_item = None
        if level == 1:
            outline_list = self._generate_list()
            if outline_list is None:
                return None
        else:
            parent_item = self._parent_entry(level)
            if parent_item is None:
                logger.debug(f"No level {level - 1} entry before <{heading.name}>, left out of the outline")
                return None

        anchor = generate_anchor_for(
            self.document, self.allocator, self.planner, heading,
            DATA_HEADING_ANCHOR_FOR, CLASS_HEADING_ANCHOR,
        )
        if anchor is None:
            return None

        if parent_item is not None:
            outline_list = parent_item.find('ol', recursive=False)
            if outline_list is None:
                outline_list = self.document.new_tag('ol')
                parent_item.append(outline_list)

        item = self.document.new_tag('li')
        item[DATA_HEADING_LEVEL] = str(level)
        link = self.document.new_tag('a', href=f"#{get_attribute(anchor, 'name')}")
        link.string = normalize_text(own_text(heading))
        item.append(link)
        outline_list.append(item)
        return item

    def provide_for_all(self) -> int:
        """Add every valid heading in document order. Returns the item count."""
        if not self.valid:
            return 0

        added = 0
        for heading in self.document.select(HEADING_SELECTOR):
            if is_valid_element(heading) and self.provide_for(heading) is not None:
                added += 1
        logger.info(f"Heading outline has {added} new entries")
        return added

    def _generate_list(self) -> Optional[Tag]:
        container = find_by_id(self.document, ID_CONTAINER_HEADING)
        if container is None:
            body = find_body(self.document)
            if body is None:
                return None
            container = self.document.new_tag('div')
            container['id'] = ID_CONTAINER_HEADING
            caption = self.document.new_tag('span')
            caption['id'] = ID_TEXT_HEADING
            caption.string = self.configuration.text('elements-heading-before')
            container.append(caption)
            body.append(container)

        outline_list = container.find('ol', recursive=False)
        if outline_list is None:
            outline_list = self.document.new_tag('ol')
            container.append(outline_list)
        return outline_list

    def _parent_entry(self, level: int) -> Optional[Tag]:
        """Last outline entry one level up, the one a level n heading nests under."""
        container = find_by_id(self.document, ID_CONTAINER_HEADING)
        if container is None:
            return None

        parents = container.find_all(attrs={DATA_HEADING_LEVEL: str(level - 1)})
        if not parents:
            return None
        return parents[-1]
