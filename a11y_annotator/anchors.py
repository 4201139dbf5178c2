"""
Named anchors used as link targets by the skipper list and heading outline.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from .dom import find_by_attribute, get_attribute
from .identifiers import IdentifierAllocator
from .insertion import InsertionPlanner, Position

logger = logging.getLogger(__name__)


def generate_anchor_for(document: BeautifulSoup, allocator: IdentifierAllocator,
                        planner: InsertionPlanner, element: Tag,
                        data_attribute: str, anchor_class: str) -> Optional[Tag]:
    """
    Create the anchor that links to an element.

    The element itself is reused when it is already a hyperlink. Returns
    None when an anchor linked through data_attribute already exists, or
    when no insertion point could be found.
    """
    identifier = allocator.ensure_id(element)
    if find_by_attribute(document, data_attribute, identifier):
        return None

    if (element.name or '').lower() == 'a':
        anchor = element
    else:
        anchor = document.new_tag('a')
        allocator.ensure_id(anchor)
        anchor['class'] = anchor_class
        if not planner.place(element, anchor, Position.BEFORE, fan_out=False):
            logger.debug(f"No place for an anchor next to #{identifier}")
            return None

    if not anchor.has_attr('name'):
        anchor['name'] = get_attribute(anchor, 'id')
    anchor[data_attribute] = identifier
    return anchor
