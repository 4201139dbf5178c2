"""
Tests for insertion planning.
"""

from bs4 import BeautifulSoup

from a11y_annotator.insertion import InsertionPlanner, Position


def new_marker(soup):
    marker = soup.new_tag('span', id='marker')
    marker['name'] = 'marker'
    marker.string = 'note'
    return marker


class TestInsertionPlanner:
    """Tests for InsertionPlanner."""

    def test_plain_element_gets_sibling(self):
        """Test ordinary elements get the new node beside them."""
        soup = BeautifulSoup('<body><p>Text</p></body>', 'html.parser')
        planner = InsertionPlanner(soup)

        planner.place(soup.p, new_marker(soup), Position.BEFORE)

        assert soup.body.contents[0].name == 'span'
        assert soup.body.contents[1].name == 'p'

    def test_absorbing_element_gets_child(self):
        """Test content tags like td and a take the node as a child."""
        soup = BeautifulSoup('<body><a href="#">Link</a></body>', 'html.parser')
        planner = InsertionPlanner(soup)

        planner.place(soup.a, new_marker(soup), Position.AFTER)

        assert soup.a.contents[-1].name == 'span'
        assert soup.a.contents[0] == 'Link'

    def test_html_delegates_to_body(self):
        """Test placing next to <html> places inside <body>."""
        soup = BeautifulSoup('<html><body><p>Text</p></body></html>', 'html.parser')
        planner = InsertionPlanner(soup)

        planner.place(soup.html, new_marker(soup), Position.BEFORE)

        assert soup.body.contents[0].name == 'span'

    def test_form_control_uses_label_for(self):
        """Test a form control redirects into its label[for]."""
        html = '<body><label for="email">Email</label><input id="email"></body>'
        soup = BeautifulSoup(html, 'html.parser')
        planner = InsertionPlanner(soup)

        placed = planner.place(soup.input, new_marker(soup), Position.AFTER)

        assert len(placed) == 1
        assert soup.label.contents[-1].name == 'span'
        assert soup.input.next_sibling is None

    def test_form_control_uses_ancestor_label(self):
        """Test a control without label[for] uses the label around it."""
        soup = BeautifulSoup('<body><label>Name <input></label></body>', 'html.parser')
        planner = InsertionPlanner(soup)

        planner.place(soup.input, new_marker(soup), Position.BEFORE)

        assert soup.label.contents[0].name == 'span'

    def test_unlabelled_control_is_skipped(self):
        """Test a control with no label gets nothing."""
        soup = BeautifulSoup('<body><input></body>', 'html.parser')
        planner = InsertionPlanner(soup)

        assert planner.place(soup.input, new_marker(soup), Position.AFTER) == []
        assert soup.find('span') is None

    def test_fan_out_to_every_label(self):
        """Test every label of a control gets a copy without id or name."""
        html = ('<body><label for="q">Search</label><input id="q">'
                '<label for="q">Find</label></body>')
        soup = BeautifulSoup(html, 'html.parser')
        planner = InsertionPlanner(soup)

        placed = planner.place(soup.input, new_marker(soup), Position.AFTER)

        assert len(placed) == 2
        assert placed[0]['id'] == 'marker'
        assert not placed[1].has_attr('id')
        assert not placed[1].has_attr('name')
        assert placed[1].get_text() == 'note'
        assert len(soup.find_all('span')) == 2

    def test_no_fan_out(self):
        """Test fan_out=False places only at the first label."""
        html = ('<body><label for="q">Search</label><input id="q">'
                '<label for="q">Find</label></body>')
        soup = BeautifulSoup(html, 'html.parser')
        planner = InsertionPlanner(soup)

        placed = planner.place(soup.input, new_marker(soup), Position.AFTER, fan_out=False)

        assert len(placed) == 1
        assert placed[0].parent is soup.find_all('label')[0]
        assert len(soup.find_all('span')) == 1
