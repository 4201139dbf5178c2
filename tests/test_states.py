"""
Tests for state annotations.
"""

import pytest
from bs4 import BeautifulSoup

from a11y_annotator.annotator import AnnotationEngine, annotate_html
from a11y_annotator.configuration import load_configuration
from a11y_annotator.states import ATTRIBUTE_RULES, rule_attributes


@pytest.fixture(scope='module')
def configuration():
    return load_configuration()


def make_engine(html, configuration):
    soup = BeautifulSoup(html, 'html.parser')
    return soup, AnnotationEngine(soup, configuration)


def after_texts(soup):
    return [span.get_text() for span in soup.select('span.force-read-after')]


def before_texts(soup):
    return [span.get_text() for span in soup.select('span.force-read-before')]


class TestAttributeRules:
    """Tests for the declarative attribute table."""

    def test_rule_attributes(self):
        """Test every announced attribute appears once in the table."""
        names = rule_attributes(ATTRIBUTE_RULES)

        assert 'aria-checked' in names
        assert 'hreflang' in names
        assert len(names) == len(set(names))

    def test_link_attributes_are_distinct(self):
        """Test no two rules share a link attribute."""
        links = [rule.link_attribute for rule in ATTRIBUTE_RULES]
        assert len(links) == len(set(links))


class TestAriaStates:
    """Tests for ARIA state and property annotations."""

    def test_checked(self, configuration):
        """Test aria-checked is announced after the element."""
        soup, engine = make_engine('<body><span aria-checked="true">Option</span></body>', configuration)

        engine.annotate_state(soup.span)

        assert after_texts(soup) == [' (checked)']
        sentinel = soup.select_one('span.force-read-after')
        assert sentinel['data-ariacheckedof'] == soup.find('span', attrs={'aria-checked': True})['id']

    def test_value_case_is_ignored(self, configuration):
        """Test attribute values match regardless of case and padding."""
        soup, engine = make_engine('<body><div aria-expanded=" TRUE ">Menu</div></body>', configuration)

        engine.annotate_state(soup.div)

        assert after_texts(soup) == [' (expanded)']

    def test_unrecognised_value_is_ignored(self, configuration):
        """Test a value without a configured text adds nothing."""
        soup, engine = make_engine('<body><span aria-checked="maybe">Option</span></body>', configuration)

        engine.annotate_state(soup.span)

        assert soup.select('span.force-read-after') == []
        assert not soup.span.has_attr('id')

    def test_autocomplete_values(self, configuration):
        """Test inline and list autocomplete are announced as such."""
        html = ('<body><input id="a" aria-autocomplete="inline"><label for="a">A</label>'
                '<input id="b" aria-autocomplete="list"><label for="b">B</label></body>')
        soup, engine = make_engine(html, configuration)

        engine.annotate_all_states()

        labels = soup.find_all('label')
        assert labels[0].get_text() == 'A (autocomplete inline)'
        assert labels[1].get_text() == 'B (autocomplete list)'

    def test_level(self, configuration):
        """Test aria-level shows its value."""
        soup, engine = make_engine('<body><ul><li aria-level="2">Item</li></ul></body>', configuration)

        engine.annotate_state(soup.li)

        assert soup.li.get_text() == 'Item (level 2)'

    def test_value_range(self, configuration):
        """Test aria-valuemin and aria-valuemax are both announced."""
        html = '<body><div role="slider" aria-valuemin="0" aria-valuemax="10">Volume</div></body>'
        soup, engine = make_engine(html, configuration)

        engine.annotate_state(soup.div)

        texts = after_texts(soup)
        assert ' (minimum value 0)' in texts
        assert ' (maximum value 10)' in texts

    def test_missing_parameter_is_no_op(self, configuration):
        """Test an attribute whose text is not configured adds nothing."""
        config = configuration.with_overrides({'aria-busy-true-after': ''})
        soup, engine = make_engine('<body><div aria-busy="true">Feed</div></body>', config)

        engine.annotate_state(soup.div)

        assert soup.find('span') is None


class TestAttributes:
    """Tests for role, title, language and link attributes."""

    def test_role(self, configuration):
        """Test a known role is described."""
        soup, engine = make_engine('<body><div role="navigation">Menu</div></body>', configuration)

        engine.annotate_state(soup.div)

        assert after_texts(soup) == [' (Navigation)']

    def test_unknown_role(self, configuration):
        """Test an unknown role adds nothing."""
        soup, engine = make_engine('<body><div role="spaceship">Menu</div></body>', configuration)

        engine.annotate_state(soup.div)

        assert soup.find('span') is None

    def test_title(self, configuration):
        """Test an author title is read after the element."""
        html = '<body><abbr title="World Health Organization">WHO</abbr></body>'
        soup, engine = make_engine(html, configuration)

        engine.annotate_state(soup.abbr)

        assert after_texts(soup) == [' (Title: World Health Organization)']

    def test_language(self, configuration):
        """Test a language change is announced on both sides."""
        soup, engine = make_engine('<body><p lang="pt-BR">Olá</p></body>', configuration)

        engine.annotate_state(soup.p)

        assert before_texts(soup) == ['(Language: Brazilian Portuguese) ']
        assert after_texts(soup) == [' (End of Brazilian Portuguese language)']

    def test_language_falls_back_to_primary_subtag(self, configuration):
        """Test an unconfigured regional code uses its base language."""
        soup, engine = make_engine('<body><p lang="pt-PT">Olá</p></body>', configuration)

        engine.annotate_state(soup.p)

        assert before_texts(soup) == ['(Language: Portuguese) ']

    def test_hreflang(self, configuration):
        """Test hreflang is treated like lang."""
        soup, engine = make_engine('<body><a href="/fr" hreflang="fr">Accueil</a></body>', configuration)

        engine.annotate_state(soup.a)

        assert soup.a.get_text() == '(Language: French) Accueil (End of French language)'

    def test_download_and_new_window(self, configuration):
        """Test download and target=_blank are read inside the link."""
        html = '<body><a href="report.pdf" download target="_blank">Report</a></body>'
        soup, engine = make_engine(html, configuration)

        engine.annotate_state(soup.a)

        assert soup.a.get_text() == 'Report (download) (opens in a new window)'

    def test_other_target_is_ignored(self, configuration):
        """Test targets other than _blank add nothing."""
        soup, engine = make_engine('<body><a href="/" target="_self">Home</a></body>', configuration)

        engine.annotate_state(soup.a)

        assert soup.a.get_text() == 'Home'


class TestCellHeaders:
    """Tests for table header annotations."""

    def test_headers_text(self, configuration):
        """Test a cell announces the text of the headers it references."""
        html = ('<body><table><tr><th id="h1">Name</th><th id="h2">Age</th></tr>'
                '<tr><td headers="h1 h2">Ada</td></tr></table></body>')
        soup, engine = make_engine(html, configuration)

        engine.annotate_state(soup.td)

        assert before_texts(soup) == ['(Headers: Name Age) ']
        assert soup.td.contents[0].name == 'span'

    def test_missing_header_is_skipped(self, configuration):
        """Test unresolvable header ids are left out."""
        html = ('<body><table><tr><th id="h1">Name</th></tr>'
                '<tr><td headers="h1 nothere">Ada</td></tr></table></body>')
        soup, engine = make_engine(html, configuration)

        engine.annotate_state(soup.td)

        assert before_texts(soup) == ['(Headers: Name) ']

    def test_header_annotations_are_left_out(self, configuration):
        """Test annotations inside a header cell are not read as its text."""
        html = ('<body><table><tr><th id="h" aria-sort="ascending">Age</th></tr>'
                '<tr><td headers="h">42</td></tr></table></body>')
        soup, engine = make_engine(html, configuration)

        engine.annotate_state(soup.th)
        engine.annotate_state(soup.td)

        assert soup.th.get_text() == 'Age (sorted ascending)'
        assert before_texts(soup) == ['(Headers: Age) ']

    def test_cell_before_header_is_idempotent(self, configuration):
        """Test a cell processed before its sorted header reads the same text on every run."""
        html = ('<body><table><tr><td headers="h">42</td>'
                '<th id="h" aria-sort="ascending">Age</th></tr></table></body>')

        once = annotate_html(html)
        twice = annotate_html(once)

        assert twice == once
        assert before_texts(BeautifulSoup(once, 'html.parser')) == ['(Headers: Age) ']


class TestImages:
    """Tests for image alternative text handling."""

    def test_alt_copied_to_title(self, configuration):
        """Test alt is copied to title and the two are linked."""
        soup, engine = make_engine('<body><img src="logo.png" alt="Logo"></body>', configuration)

        engine.annotate_state(soup.img)

        assert soup.img['alt'] == 'Logo'
        assert soup.img['title'] == 'Logo'
        assert soup.img['data-attributetitleof'] == soup.img['id']
        assert soup.find('span') is None

    def test_title_copied_to_alt(self, configuration):
        """Test title is copied to a missing alt."""
        soup, engine = make_engine('<body><img src="logo.png" title="Logo"></body>', configuration)

        engine.annotate_state(soup.img)

        assert soup.img['alt'] == 'Logo'

    def test_decorative_image_hidden(self, configuration):
        """Test an image with neither alt nor title is hidden as decoration."""
        soup, engine = make_engine('<body><img src="line.png"></body>', configuration)

        engine.annotate_state(soup.img)

        assert soup.img['alt'] == ''
        assert soup.img['role'] == 'presentation'
        assert soup.img['aria-hidden'] == 'true'
        assert not soup.img.has_attr('title')
        assert soup.find('span') is None

    def test_decorative_image_stays_hidden(self, configuration):
        """Test a second pass does not give a hidden image a title."""
        soup, engine = make_engine('<body><img src="line.png"></body>', configuration)

        engine.annotate_all_states()
        once = str(soup)
        engine.annotate_all_states()

        assert str(soup) == once
        assert not soup.img.has_attr('title')


class TestAnnotateAll:
    """Tests for batch state annotation."""

    def test_ignored_subtree(self, configuration):
        """Test elements under data-ignoreaccessibilityfix are left alone."""
        html = ('<body><div data-ignoreaccessibilityfix="true">'
                '<span aria-busy="true">Feed</span></div></body>')
        soup, engine = make_engine(html, configuration)

        assert engine.annotate_all_states() == 0
        assert soup.select('span.force-read-after') == []

    def test_restricted_attributes(self, configuration):
        """Test only the requested attributes are annotated."""
        html = '<body><div aria-busy="true" aria-expanded="true">Feed</div></body>'
        soup, engine = make_engine(html, configuration)

        engine.annotate_all_states(['aria-busy'])

        assert after_texts(soup) == [' (updating)']

    def test_idempotent(self, configuration):
        """Test annotating twice gives the same document as annotating once."""
        html = ('<body><p lang="fr">Bonjour</p>'
                '<a href="f.zip" download target="_blank" title="Archive">Files</a>'
                '<button aria-pressed="true" accesskey="b">Bold</button></body>')
        soup, engine = make_engine(html, configuration)

        engine.annotate_all_states()
        once = str(soup)
        engine.annotate_all_states()

        assert str(soup) == once

    def test_generated_content_is_not_annotated(self, configuration):
        """Test sentinels are never annotated themselves."""
        soup, engine = make_engine('<body><p lang="fr">Bonjour</p></body>', configuration)

        engine.annotate_all_states()
        engine.annotate_all_states()

        assert len(soup.select('span.force-read-before')) == 1
        assert len(soup.select('span.force-read-after')) == 1
