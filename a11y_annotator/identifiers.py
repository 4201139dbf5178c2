"""
Identifier allocation for annotated elements.
"""

import logging
from typing import Set

from bs4 import BeautifulSoup, Tag

from .dom import find_by_id, get_attribute

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = 'id-a11y-'


class IdentifierAllocator:
    """
    Hands out document-unique ids of the form <prefix><counter>.

    Ids already present in the tree, author ids included, are never reused,
    and an id given to one element is never moved to another.
    """

    def __init__(self, document: BeautifulSoup, prefix: str = DEFAULT_PREFIX):
        self.document = document
        self.prefix = prefix or DEFAULT_PREFIX
        self.counter = 0
        self.taken: Set[str] = {
            get_attribute(tag, 'id') for tag in document.find_all(attrs={'id': True})
        }

    def ensure_id(self, element: Tag) -> str:
        """Return the element's id, assigning a fresh one if it has none."""
        identifier = get_attribute(element, 'id')
        if identifier:
            self.taken.add(identifier)
            return identifier

        identifier = self._next_free()
        element['id'] = identifier
        self.taken.add(identifier)
        logger.debug(f"Assigned id {identifier} to <{element.name}>")
        return identifier

    def _next_free(self) -> str:
        while True:
            self.counter += 1
            candidate = f'{self.prefix}{self.counter}'
            if candidate in self.taken:
                continue
            # The tree may have gained ids since construction
            if find_by_id(self.document, candidate) is not None:
                self.taken.add(candidate)
                continue
            return candidate
