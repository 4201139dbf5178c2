"""
Keyboard shortcuts (accesskey).

- ShortcutResolver frees a key before the engine assigns it, moving the
  element that already holds it to the first unused key of the alphabet.
- ShortcutLister announces each element's shortcut and keeps a list of all
  shortcuts of the page at the top (or bottom) of <body>.
"""

import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .annotation import AnnotationWriter
from .configuration import Configuration
from .dom import (
    find_body,
    find_by_id,
    get_attribute,
    is_valid_element,
    normalize_text,
    own_text,
    split_tokens,
)

logger = logging.getLogger(__name__)

SHORTCUT_ALPHABET = '1234567890abcdefghijklmnopqrstuvwxyz'

ID_CONTAINER_SHORTCUTS = 'container-shortcuts'
ID_TEXT_SHORTCUTS = 'text-shortcuts'

DATA_ATTRIBUTE_ACCESSKEY_OF = 'data-attributeaccesskeyof'
DATA_ATTRIBUTE_TITLE_OF = 'data-attributetitleof'
DATA_SHORTCUT_KEY = 'data-shortcutkey'

BUTTON_INPUT_TYPES = ('button', 'submit', 'reset')

FIREFOX_PATTERN = re.compile(r'firefox/(?:[2-9]|[1-9]\d)|minefield/3')


def shortcut_prefix_for(user_agent: Optional[str], default: str) -> str:
    """Return the modifier keys a browser uses to trigger accesskeys."""
    if not user_agent:
        return default

    agent = user_agent.lower()
    opera = 'opera' in agent
    mac = 'mac' in agent
    konqueror = 'konqueror' in agent
    spoofer = 'spoofer' in agent
    safari = 'applewebkit' in agent
    windows = 'windows' in agent
    chrome = 'chrome' in agent
    firefox = FIREFOX_PATTERN.search(agent) is not None
    ie = 'msie' in agent or 'trident' in agent

    if opera:
        return 'SHIFT + ESC'
    if chrome and mac and not spoofer:
        return 'CTRL + OPTION'
    if safari and not windows and not spoofer:
        return 'CTRL + ALT'
    if not windows and (safari or mac or konqueror):
        return 'CTRL'
    if firefox:
        return 'ALT + SHIFT'
    if chrome or ie:
        return 'ALT'
    return default


def describe_element(document: BeautifulSoup, element: Tag) -> str:
    """
    Return a short human description of an element.

    Looks at title, aria-label, alt, label, the first resolvable
    aria-labelledby/aria-describedby target, the value of button-like
    inputs, and finally the element text.
    """
    description = None
    if element.has_attr('title'):
        description = get_attribute(element, 'title')
    elif element.has_attr('aria-label'):
        description = get_attribute(element, 'aria-label')
    elif element.has_attr('alt'):
        description = get_attribute(element, 'alt')
    elif element.has_attr('label'):
        description = get_attribute(element, 'label')
    elif element.has_attr('aria-labelledby') or element.has_attr('aria-describedby'):
        references = get_attribute(element, 'aria-labelledby')
        if references is None:
            references = get_attribute(element, 'aria-describedby')
        for reference in split_tokens(references):
            described_by = find_by_id(document, reference)
            if described_by is not None:
                description = own_text(described_by)
                break
    elif element.name == 'input' and element.has_attr('type'):
        input_type = (get_attribute(element, 'type') or '').lower()
        if input_type in BUTTON_INPUT_TYPES and element.has_attr('value'):
            description = get_attribute(element, 'value')

    if description is None:
        description = own_text(element)
    return normalize_text(description)


class ShortcutResolver:
    """Resolves accesskey collisions across the whole document."""

    def __init__(self, document: BeautifulSoup):
        self.document = document

    def shortcut_elements(self) -> List[Tag]:
        return self.document.find_all(attrs={'accesskey': True})

    @staticmethod
    def keys_of(element: Tag) -> List[str]:
        return split_tokens((get_attribute(element, 'accesskey') or '').lower())

    def free_shortcut(self, key: str) -> Optional[Tag]:
        """
        Make key available by moving one current holder to a free key.

        Returns the reassigned element, or None when nobody held the key or
        the alphabet is exhausted (the holder then keeps its key).
        """
        key = key.lower()
        elements = self.shortcut_elements()

        for element in elements:
            if key not in self.keys_of(element):
                continue
            for candidate in SHORTCUT_ALPHABET:
                if any(candidate in self.keys_of(other) for other in elements):
                    continue
                element['accesskey'] = candidate
                logger.info(f"Moved shortcut '{key}' of <{element.name}> to '{candidate}'")
                return element
            logger.warning(f"No free shortcut left, <{element.name}> keeps '{key}'")

        return None


class ShortcutLister:
    """Announces accesskeys and lists them in a page-level container."""

    def __init__(self, document: BeautifulSoup, configuration: Configuration,
                 writer: AnnotationWriter, user_agent: Optional[str] = None):
        self.document = document
        self.configuration = configuration
        self.writer = writer
        self.prefix = shortcut_prefix_for(
            user_agent, configuration.text('attribute-accesskey-default'))
        self.list_added = False
        self.list_shortcuts: Optional[Tag] = None

    def display_shortcut(self, element: Tag) -> None:
        keys = split_tokens(get_attribute(element, 'accesskey'))
        if not keys:
            return

        description = describe_element(self.document, element)
        if not element.has_attr('title'):
            identifier = self.writer.allocator.ensure_id(element)
            element[DATA_ATTRIBUTE_TITLE_OF] = identifier
            element['title'] = description

        shortcuts = [f'{self.prefix} + {key.upper()}' for key in keys]
        config = self.configuration
        self.writer.force_read_templated(
            element, ', '.join(shortcuts),
            config.text('attribute-accesskey-prefix-before'),
            config.text('attribute-accesskey-suffix-before'),
            config.text('attribute-accesskey-prefix-after'),
            config.text('attribute-accesskey-suffix-after'),
            DATA_ATTRIBUTE_ACCESSKEY_OF,
        )

        if not self.list_added:
            self.list_shortcuts = self._generate_list()
        if self.list_shortcuts is None:
            return

        for key, shortcut in zip(keys, shortcuts):
            key = key.upper()
            existing = [
                item for item in self.list_shortcuts.find_all('li', recursive=False)
                if get_attribute(item, DATA_SHORTCUT_KEY) == key
            ]
            if existing:
                continue
            item = self.document.new_tag('li')
            item[DATA_SHORTCUT_KEY] = key
            item.string = f'{shortcut}: {description}'
            self.list_shortcuts.append(item)

    def display_all_shortcuts(self) -> int:
        elements = [
            element for element in self.document.find_all(attrs={'accesskey': True})
            if is_valid_element(element)
        ]
        for element in elements:
            self.display_shortcut(element)
        return len(elements)

    def _generate_list(self) -> Optional[Tag]:
        self.list_added = True

        container = find_by_id(self.document, ID_CONTAINER_SHORTCUTS)
        if container is None:
            body = find_body(self.document)
            if body is None:
                logger.debug("Document has no <body>, shortcut list not created")
                return None

            container = self.document.new_tag('div')
            container['id'] = ID_CONTAINER_SHORTCUTS
            caption = self.document.new_tag('span')
            caption['id'] = ID_TEXT_SHORTCUTS
            container.append(caption)

            text_before = self.configuration.text('elements-accesskey-before')
            if text_before:
                caption.string = text_before
                body.insert(0, container)
            else:
                caption.string = self.configuration.text('elements-accesskey-after')
                body.append(container)

        shortcut_list = container.find('ul', recursive=False)
        if shortcut_list is None:
            shortcut_list = self.document.new_tag('ul')
            container.append(shortcut_list)
        return shortcut_list
