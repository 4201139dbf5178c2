"""
Insertion planning for annotations and anchors.

Sibling insertion is not always spoken by assistive technology, and next to
an inline form control it breaks the layout. The planner therefore resolves
where a new element really goes:

- <html> delegates to <body>
- content-absorbing tags (body, a, caption, figcaption, li, dt, dd, label,
  option, td, th) take the new element as their first or last child
- form controls (input, select, textarea) redirect to their label(s), by
  label[for] first and ancestor label second; every label gets a copy
- anything else gets a plain sibling before or after it
"""

import copy
import logging
from enum import Enum
from typing import List, Tuple, Union

from bs4 import BeautifulSoup, Tag

from .dom import find_body, get_attribute

logger = logging.getLogger(__name__)

ABSORBING_TAGS = frozenset([
    'body', 'a', 'caption', 'figcaption', 'li', 'dt', 'dd', 'label', 'option', 'td', 'th',
])

FORM_CONTROL_TAGS = frozenset(['input', 'select', 'textarea'])

# Attributes that must stay unique and are dropped from fan-out copies
UNIQUE_ATTRIBUTES = ('id', 'name')


class Position(str, Enum):
    """Side of the target an element is placed on."""
    BEFORE = "before"
    AFTER = "after"


class InsertionPlanner:
    """Resolves the legal insertion point(s) for an element next to a target."""

    def __init__(self, document: BeautifulSoup):
        self.document = document

    def resolve(self, target: Tag) -> List[Tuple[Tag, bool]]:
        """
        Return the insertion points for a target.

        Each point is (anchor, inside): inside=True means the new element
        becomes a child of anchor, otherwise a sibling.
        """
        tag_name = (target.name or '').lower()

        if tag_name == 'html':
            body = find_body(self.document)
            if body is None:
                logger.debug("Document has no <body>, nothing to insert into")
                return []
            return self.resolve(body)

        if tag_name in ABSORBING_TAGS:
            return [(target, True)]

        if tag_name in FORM_CONTROL_TAGS:
            points = []
            for label in self.find_labels(target):
                points.extend(self.resolve(label))
            if not points:
                logger.debug(f"No label found for <{tag_name}>, skipping insertion")
            return points

        if target.parent is None:
            logger.debug(f"<{tag_name}> is detached, skipping insertion")
            return []
        return [(target, False)]

    def find_labels(self, control: Tag) -> List[Tag]:
        """Labels of a form control: explicit label[for] first, else ancestors."""
        labels = []
        identifier = get_attribute(control, 'id')
        if identifier:
            labels = [
                label for label in self.document.find_all('label')
                if get_attribute(label, 'for') == identifier
            ]
        if not labels:
            labels = list(control.find_parents('label'))
        return labels

    def place(self, target: Tag, new_element: Tag,
              position: Union[Position, str], fan_out: bool = True) -> List[Tag]:
        """
        Insert new_element before or after target.

        Returns the inserted nodes: new_element itself at the first point and
        copies at any further ones. An empty list means no legal point.
        With fan_out=False only the first point is used.
        """
        position = Position(position)
        placed = []

        points = self.resolve(target)
        if not fan_out:
            points = points[:1]

        for index, (anchor, inside) in enumerate(points):
            node = new_element if index == 0 else self._copy(new_element)
            if inside:
                if position is Position.BEFORE:
                    anchor.insert(0, node)
                else:
                    anchor.append(node)
            elif position is Position.BEFORE:
                anchor.insert_before(node)
            else:
                anchor.insert_after(node)
            placed.append(node)

        return placed

    def _copy(self, element: Tag) -> Tag:
        clone = copy.copy(element)
        for name in UNIQUE_ATTRIBUTES:
            if clone.has_attr(name):
                del clone[name]
        return clone
