"""
Document helpers shared by the annotation components.

BeautifulSoup owns every node of the tree. These helpers only read
attributes and walk parents, so components look elements up by query and
never keep their own copies of tree state.
"""

import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag


# =============================================================================
# Reserved names
# =============================================================================

IGNORE_ATTRIBUTE = 'data-ignoreaccessibilityfix'

CLASS_FORCE_READ_BEFORE = 'force-read-before'
CLASS_FORCE_READ_AFTER = 'force-read-after'
CLASS_LONG_DESCRIPTION_LINK = 'longdescription-link'

# Elements created by the engine that must never be annotated themselves
GENERATED_CLASSES = (
    CLASS_FORCE_READ_BEFORE,
    CLASS_FORCE_READ_AFTER,
    CLASS_LONG_DESCRIPTION_LINK,
)

IGNORED_TAGS = ('head', 'script', 'style', 'template')

WHITESPACE_PATTERN = re.compile(r'[ \n\t\r]+')


# =============================================================================
# Attribute access
# =============================================================================

def get_attribute(element: Tag, name: str) -> Optional[str]:
    """
    Return an attribute value as a plain string.

    html.parser stores class, accesskey and headers as lists; they are
    joined back with single spaces.
    """
    value = element.get(name)
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return ' '.join(value)
    return value


def split_tokens(value: Optional[str]) -> List[str]:
    """Split a whitespace separated attribute value."""
    if not value:
        return []
    return [token for token in WHITESPACE_PATTERN.split(value.strip()) if token]


def has_class(element: Tag, class_name: str) -> bool:
    return class_name in split_tokens(get_attribute(element, 'class'))


def normalize_text(text: Optional[str]) -> str:
    """Collapse runs of whitespace and trim."""
    if not text:
        return ''
    return WHITESPACE_PATTERN.sub(' ', text).strip()


def is_generated(element: Tag) -> bool:
    """Check whether an element is a sentinel or link the engine created."""
    return any(has_class(element, class_name) for class_name in GENERATED_CLASSES)


def own_text(element: Tag) -> str:
    """
    Return the text of an element without the engine's generated content.

    Sentinels and long-description links placed inside an element are
    skipped, so text derived from it is the same on every run.
    """
    texts = []
    for string in element.strings:
        node = string.parent
        while node is not None and node is not element:
            if is_generated(node):
                break
            node = node.parent
        else:
            texts.append(string)
    return ''.join(texts)


# =============================================================================
# Queries
# =============================================================================

def find_by_id(document: BeautifulSoup, identifier: str) -> Optional[Tag]:
    if not identifier:
        return None
    return document.find(attrs={'id': identifier})


def find_by_attribute(document: BeautifulSoup, name: str, value: str,
                      class_name: Optional[str] = None) -> List[Tag]:
    """Find elements whose attribute equals value, optionally with a class."""
    def matches(tag: Tag) -> bool:
        if get_attribute(tag, name) != value:
            return False
        return class_name is None or has_class(tag, class_name)

    return document.find_all(matches)


def find_body(document: BeautifulSoup) -> Optional[Tag]:
    return document.find('body')


def get_document(element: Tag) -> Optional[BeautifulSoup]:
    """Return the document an element is attached to, or None if detached."""
    if isinstance(element, BeautifulSoup):
        return element
    for parent in element.parents:
        if isinstance(parent, BeautifulSoup):
            return parent
    return None


def is_valid_element(element: Tag) -> bool:
    """
    Check whether an element may be processed by a batch operation.

    Rejects detached elements, elements inside head/script/style/template,
    elements opted out with data-ignoreaccessibilityfix, and content the
    engine generated itself.
    """
    if get_document(element) is None:
        return False

    node = element
    while node is not None and not isinstance(node, BeautifulSoup):
        if node.name in IGNORED_TAGS:
            return False
        if node.has_attr(IGNORE_ATTRIBUTE):
            return False
        if is_generated(node):
            return False
        node = node.parent
    return True
