"""
State annotations.

Announces ARIA states and properties, roles, titles, languages, table
header associations, shortcuts and link behaviour (download, new window)
as force-read text.

Most attributes are driven by one declarative table (ATTRIBUTE_RULES). A
rule either maps recognised values to a template stem, whose -before and
-after parameters are the texts, or shows the attribute value itself
between the stem's -prefix-before/-suffix-before/-prefix-after/-suffix-after
parameters. Values a rule does not recognise are ignored.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from .annotation import AnnotationWriter
from .configuration import Configuration
from .dom import find_by_id, get_attribute, is_valid_element, normalize_text, own_text, split_tokens
from .shortcuts import DATA_ATTRIBUTE_TITLE_OF, ShortcutLister

logger = logging.getLogger(__name__)

# Matches an attribute whatever its value
ANY_VALUE = '*'

DATA_ATTRIBUTE_HEADERS_OF = 'data-attributeheadersof'

CELL_TAGS = ('td', 'th')


@dataclass(frozen=True)
class AttributeRule:
    """
    How one attribute is announced.

    attributes: candidate attribute names, the first present one is used
    link_attribute: data-* attribute linking the sentinels to the element
    states: recognised value -> template stem
    template: stem for showing the value itself
    descriptions: parameter family describing the value ("role-" ...)
    skip_derived: skip elements whose title the engine derived itself
    """
    attributes: Tuple[str, ...]
    link_attribute: str
    states: Dict[str, str] = field(default_factory=dict)
    template: Optional[str] = None
    descriptions: Optional[str] = None
    skip_derived: bool = False


ATTRIBUTE_RULES: Tuple[AttributeRule, ...] = (
    AttributeRule(('aria-busy',), 'data-ariabusyof',
                  states={'true': 'aria-busy-true'}),
    AttributeRule(('aria-checked',), 'data-ariacheckedof',
                  states={'true': 'aria-checked-true',
                          'false': 'aria-checked-false',
                          'mixed': 'aria-checked-mixed'}),
    AttributeRule(('aria-dropeffect',), 'data-ariadropeffectof',
                  states={'copy': 'aria-dropeffect-copy',
                          'move': 'aria-dropeffect-move',
                          'link': 'aria-dropeffect-link',
                          'execute': 'aria-dropeffect-execute',
                          'popup': 'aria-dropeffect-popup'}),
    AttributeRule(('aria-expanded',), 'data-ariaexpandedof',
                  states={'true': 'aria-expanded-true',
                          'false': 'aria-expanded-false'}),
    AttributeRule(('aria-grabbed',), 'data-ariagrabbedof',
                  states={'true': 'aria-grabbed-true',
                          'false': 'aria-grabbed-false'}),
    AttributeRule(('aria-haspopup',), 'data-ariahaspopupof',
                  states={'true': 'aria-haspopup-true'}),
    AttributeRule(('aria-level',), 'data-arialevelof',
                  template='aria-level'),
    AttributeRule(('aria-orientation',), 'data-ariaorientationof',
                  states={'vertical': 'aria-orientation-vertical',
                          'horizontal': 'aria-orientation-horizontal'}),
    AttributeRule(('aria-pressed',), 'data-ariapressedof',
                  states={'true': 'aria-pressed-true',
                          'false': 'aria-pressed-false',
                          'mixed': 'aria-pressed-mixed'}),
    AttributeRule(('aria-selected',), 'data-ariaselectedof',
                  states={'true': 'aria-selected-true',
                          'false': 'aria-selected-false'}),
    AttributeRule(('aria-sort',), 'data-ariasortof',
                  states={'ascending': 'aria-sort-ascending',
                          'descending': 'aria-sort-descending',
                          'other': 'aria-sort-other'}),
    AttributeRule(('aria-required',), 'data-ariarequiredof',
                  states={'true': 'aria-required-true'}),
    AttributeRule(('aria-valuemin',), 'data-ariavalueminof',
                  template='aria-value-minimum'),
    AttributeRule(('aria-valuemax',), 'data-ariavaluemaxof',
                  template='aria-value-maximum'),
    AttributeRule(('aria-autocomplete',), 'data-ariaautocompleteof',
                  states={'both': 'aria-autocomplete-both',
                          'inline': 'aria-autocomplete-inline',
                          'list': 'aria-autocomplete-list'}),
    AttributeRule(('role',), 'data-roleof',
                  template='attribute-role', descriptions='role-'),
    AttributeRule(('title',), 'data-attributetitlereadof',
                  template='attribute-title', skip_derived=True),
    AttributeRule(('lang', 'hreflang'), 'data-languageof',
                  template='attribute-language', descriptions='language-'),
    AttributeRule(('download',), 'data-attributedownloadof',
                  states={ANY_VALUE: 'attribute-download'}),
    AttributeRule(('target',), 'data-attributetargetof',
                  states={'_blank': 'attribute-target-blank'}),
)


def rule_attributes(rules: Iterable[AttributeRule] = ATTRIBUTE_RULES) -> List[str]:
    names = []
    for rule in rules:
        names.extend(rule.attributes)
    return names


class StateAnnotator:
    """Maps attribute values to configured text and writes the annotations."""

    def __init__(self, document: BeautifulSoup, configuration: Configuration,
                 writer: AnnotationWriter, shortcuts: Optional[ShortcutLister] = None,
                 rules: Tuple[AttributeRule, ...] = ATTRIBUTE_RULES):
        self.document = document
        self.configuration = configuration
        self.writer = writer
        self.shortcuts = shortcuts or ShortcutLister(document, configuration, writer)
        self.rules = rules

    # =========================================================================
    # Single element
    # =========================================================================

    def annotate(self, element: Tag, attributes: Optional[Iterable[str]] = None) -> None:
        """
        Announce every recognised attribute of an element.

        Args:
            element: The element to annotate
            attributes: Restrict to these attribute names (default: all)
        """
        wanted = set(attributes) if attributes is not None else None

        def selected(name: str) -> bool:
            return wanted is None or name in wanted

        if element.name == 'img' and selected('title'):
            self.display_alternative_text_image(element)
            if get_attribute(element, 'aria-hidden') == 'true':
                return

        for rule in self.rules:
            if not any(selected(name) for name in rule.attributes):
                continue
            self.apply_rule(element, rule)

        if selected('headers') and element.name in CELL_TAGS:
            self.display_cell_header(element)
        if selected('accesskey'):
            self.shortcuts.display_shortcut(element)

    def apply_rule(self, element: Tag, rule: AttributeRule) -> None:
        value = None
        for name in rule.attributes:
            if element.has_attr(name):
                value = get_attribute(element, name) or ''
                break
        if value is None:
            return

        if rule.skip_derived and element.has_attr(DATA_ATTRIBUTE_TITLE_OF):
            return

        config = self.configuration
        if rule.states:
            stem = rule.states.get(value.strip().lower(), rule.states.get(ANY_VALUE))
            if stem is None:
                logger.debug(f"Unrecognised value {value!r} for {rule.attributes[0]}")
                return
            self.writer.force_read(
                element,
                config.text(f'{stem}-before'),
                config.text(f'{stem}-after'),
                rule.link_attribute,
            )
            return

        if rule.descriptions:
            value = self.describe(rule.descriptions, value)
            if value is None:
                return
        elif not value.strip():
            return

        stem = rule.template
        self.writer.force_read_templated(
            element, value,
            config.text(f'{stem}-prefix-before'),
            config.text(f'{stem}-suffix-before'),
            config.text(f'{stem}-prefix-after'),
            config.text(f'{stem}-suffix-after'),
            rule.link_attribute,
        )

    def describe(self, family: str, value: str) -> Optional[str]:
        """
        Look up the configured description of a value, e.g. role-button.

        Hyphenated codes (pt-BR) fall back to their first part (pt).
        """
        code = value.strip().lower()
        if not code:
            return None
        description = self.configuration.get_parameter(f'{family}{code}')
        if description is None and '-' in code:
            description = self.configuration.get_parameter(f'{family}{code.split("-")[0]}')
        if not description:
            logger.debug(f"No description configured for {family}{code}")
            return None
        return description

    def display_cell_header(self, cell: Tag) -> None:
        """Announce the header cells a data cell refers to through headers."""
        texts = []
        for header_id in split_tokens(get_attribute(cell, 'headers')):
            header = find_by_id(self.document, header_id)
            if header is None:
                logger.debug(f"headers references missing id {header_id!r}")
                continue
            text = normalize_text(own_text(header))
            if text:
                texts.append(text)

        header_text = ' '.join(texts)
        if not header_text:
            return

        config = self.configuration
        self.writer.force_read_templated(
            cell, header_text,
            config.text('attribute-headers-prefix-before'),
            config.text('attribute-headers-suffix-before'),
            config.text('attribute-headers-prefix-after'),
            config.text('attribute-headers-suffix-after'),
            DATA_ATTRIBUTE_HEADERS_OF,
        )

    def display_alternative_text_image(self, image: Tag) -> None:
        """
        Align alt and title of an image.

        An image with alt or title gets the other one copied from it and is
        marked as already titled. An image with neither is hidden from
        assistive technology as decoration. Hidden images are left alone.
        """
        if get_attribute(image, 'aria-hidden') == 'true':
            return
        if image.has_attr('alt') or image.has_attr('title'):
            if image.has_attr('alt') and not image.has_attr('title'):
                image['title'] = get_attribute(image, 'alt')
            elif image.has_attr('title') and not image.has_attr('alt'):
                image['alt'] = get_attribute(image, 'title')
            identifier = self.writer.allocator.ensure_id(image)
            image[DATA_ATTRIBUTE_TITLE_OF] = identifier
        else:
            image['alt'] = ''
            image['role'] = 'presentation'
            image['aria-hidden'] = 'true'

    # =========================================================================
    # Batch
    # =========================================================================

    def selector(self, attributes: Optional[Iterable[str]] = None) -> str:
        names = rule_attributes(self.rules) + ['accesskey']
        if attributes is not None:
            wanted = set(attributes)
            names = [name for name in names if name in wanted]
        else:
            wanted = None

        parts = [f'[{name}]' for name in names]
        if wanted is None or 'headers' in wanted:
            parts.extend(f'{tag}[headers]' for tag in CELL_TAGS)
        if wanted is None or 'title' in wanted:
            parts.append('img')
        return ','.join(parts)

    def annotate_all(self, attributes: Optional[Iterable[str]] = None) -> int:
        """
        Annotate every valid element carrying a recognised attribute.

        Returns:
            Number of elements processed
        """
        attributes = list(attributes) if attributes is not None else None
        selector = self.selector(attributes)
        if not selector:
            return 0

        elements = [element for element in self.document.select(selector) if is_valid_element(element)]
        for element in elements:
            self.annotate(element, attributes)

        logger.info(f"Annotated states of {len(elements)} elements")
        return len(elements)
