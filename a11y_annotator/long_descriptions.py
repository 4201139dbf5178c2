"""
Links to the long descriptions of images (longdesc).
"""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .configuration import Configuration
from .dom import CLASS_LONG_DESCRIPTION_LINK, find_by_attribute, get_attribute, is_valid_element
from .identifiers import IdentifierAllocator
from .insertion import InsertionPlanner, Position

logger = logging.getLogger(__name__)

DATA_LONG_DESCRIPTION_FOR_IMAGE = 'data-longdescriptionfor'


class LongDescriptionLinker:
    """Turns the longdesc attribute of images into visible links."""

    def __init__(self, document: BeautifulSoup, configuration: Configuration,
                 allocator: IdentifierAllocator, planner: Optional[InsertionPlanner] = None):
        self.document = document
        self.configuration = configuration
        self.allocator = allocator
        self.planner = planner or InsertionPlanner(document)

    def link(self, image: Tag) -> List[Tag]:
        """
        Add links to the long description of an image.

        A link is written on each side whose configured prefix or suffix is
        non-empty. Images without alt text, or already linked, are skipped.

        Returns:
            The link elements placed in the document
        """
        if not image.has_attr('longdesc'):
            return []

        identifier = self.allocator.ensure_id(image)
        if find_by_attribute(self.document, DATA_LONG_DESCRIPTION_FOR_IMAGE, identifier):
            return []
        if not image.has_attr('alt'):
            logger.debug(f"Image #{identifier} has longdesc but no alt, not linked")
            return []

        alternative_text = get_attribute(image, 'alt') or ''
        config = self.configuration
        placed = []
        for side, position in (('before', Position.BEFORE), ('after', Position.AFTER)):
            prefix = config.text(f'attribute-longdescription-prefix-{side}')
            suffix = config.text(f'attribute-longdescription-suffix-{side}')
            if not prefix and not suffix:
                continue

            link = self.document.new_tag('a', href=get_attribute(image, 'longdesc'), target='_blank')
            link['class'] = CLASS_LONG_DESCRIPTION_LINK
            link[DATA_LONG_DESCRIPTION_FOR_IMAGE] = identifier
            link.string = f'{prefix}{alternative_text}{suffix}'.strip()
            placed.extend(self.planner.place(image, link, position))
        return placed

    def link_all(self) -> int:
        """Link every valid element with longdesc. Returns the number linked."""
        linked = 0
        for image in self.document.select('[longdesc]'):
            if is_valid_element(image) and self.link(image):
                linked += 1
        logger.info(f"Linked {linked} long descriptions")
        return linked
