"""
Skipper navigation.

A skipper is a configured "skip to X" link. Each element matching a skipper
selector gets an anchor, and a link to that anchor (with the skipper's
keyboard shortcut) is listed in #container-skippers at the top of <body>.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from .anchors import generate_anchor_for
from .configuration import Configuration, Skipper
from .dom import find_body, find_by_id, get_attribute, is_valid_element
from .identifiers import IdentifierAllocator
from .insertion import InsertionPlanner
from .shortcuts import ShortcutResolver

logger = logging.getLogger(__name__)

ID_CONTAINER_SKIPPERS = 'container-skippers'
CLASS_SKIPPER_ANCHOR = 'skipper-anchor'
DATA_ANCHOR_FOR = 'data-anchorfor'


class SkipperBuilder:
    """Builds the flat list of skip links from the configured skippers."""

    def __init__(self, document: BeautifulSoup, configuration: Configuration,
                 allocator: IdentifierAllocator, planner: Optional[InsertionPlanner] = None,
                 resolver: Optional[ShortcutResolver] = None):
        self.document = document
        self.configuration = configuration
        self.allocator = allocator
        self.planner = planner or InsertionPlanner(document)
        self.resolver = resolver or ShortcutResolver(document)
        self.list_added = False
        self.list_skippers: Optional[Tag] = None

    def skipper_for(self, element: Tag) -> Optional[Skipper]:
        """Return the first configured skipper whose selector matches element."""
        for skipper in self.configuration.skippers:
            if any(match is element for match in self.document.select(skipper.selector)):
                return skipper
        return None

    def provide_for(self, element: Tag) -> Optional[Tag]:
        """
        Add a skip link for one element.

        Returns the new link, or None when no skipper matches, the element
        already has a skipper anchor, or there is no <body> for the list.
        """
        skipper = self.skipper_for(element)
        if skipper is None:
            return None

        if not self.list_added:
            self.list_skippers = self._generate_list()
        if self.list_skippers is None:
            return None

        anchor = generate_anchor_for(
            self.document, self.allocator, self.planner, element,
            DATA_ANCHOR_FOR, CLASS_SKIPPER_ANCHOR,
        )
        if anchor is None:
            return None

        item = self.document.new_tag('li')
        link = self.document.new_tag('a', href=f"#{get_attribute(anchor, 'name')}")
        link.string = skipper.description

        if skipper.shortcuts:
            shortcut = skipper.shortcuts[0]
            self.resolver.free_shortcut(shortcut)
            link['accesskey'] = shortcut
        self.allocator.ensure_id(link)

        item.append(link)
        self.list_skippers.append(item)
        logger.debug(f"Skipper '{skipper.description}' linked to <{element.name}>")
        return link

    def provide_for_all(self) -> int:
        """
        Add skip links for every configured skipper.

        Skippers are visited in configuration order, and the elements of
        each skipper in document order, so the list follows the
        configuration.
        """
        added = 0
        for skipper in self.configuration.skippers:
            for element in self.document.select(skipper.selector):
                if is_valid_element(element) and self.provide_for(element) is not None:
                    added += 1
        logger.info(f"Added {added} skip links")
        return added

    def _generate_list(self) -> Optional[Tag]:
        self.list_added = True

        container = find_by_id(self.document, ID_CONTAINER_SKIPPERS)
        if container is None:
            body = find_body(self.document)
            if body is None:
                logger.debug("Document has no <body>, skipper list not created")
                return None
            container = self.document.new_tag('div')
            container['id'] = ID_CONTAINER_SKIPPERS
            first_child = body.find(True, recursive=False)
            if first_child is not None:
                first_child.insert_before(container)
            else:
                body.append(container)

        skipper_list = container.find('ul', recursive=False)
        if skipper_list is None:
            skipper_list = self.document.new_tag('ul')
            container.append(skipper_list)
        return skipper_list
