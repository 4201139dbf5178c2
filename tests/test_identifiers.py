"""
Tests for identifier allocation.
"""

from bs4 import BeautifulSoup

from a11y_annotator.identifiers import IdentifierAllocator


class TestIdentifierAllocator:
    """Tests for IdentifierAllocator."""

    def test_existing_id_is_kept(self):
        """Test an element that has an id keeps it."""
        soup = BeautifulSoup('<p id="intro">Hi</p>', 'html.parser')
        allocator = IdentifierAllocator(soup, 'x-')

        assert allocator.ensure_id(soup.p) == 'intro'
        assert soup.p['id'] == 'intro'

    def test_empty_id_is_replaced(self):
        """Test an empty id counts as no id."""
        soup = BeautifulSoup('<p id="">Hi</p>', 'html.parser')
        allocator = IdentifierAllocator(soup, 'x-')

        assert allocator.ensure_id(soup.p) == 'x-1'

    def test_author_ids_are_skipped(self):
        """Test generated ids never collide with ids already in the page."""
        soup = BeautifulSoup('<p id="x-1">A</p><p id="x-2">B</p><p>C</p><p>D</p>', 'html.parser')
        allocator = IdentifierAllocator(soup, 'x-')
        third, fourth = soup.find_all('p')[2:]

        assert allocator.ensure_id(third) == 'x-3'
        assert allocator.ensure_id(fourth) == 'x-4'

    def test_ids_are_unique(self):
        """Test every element gets a different id, and repeated calls are stable."""
        soup = BeautifulSoup('<p>A</p><p>B</p><p>C</p>', 'html.parser')
        allocator = IdentifierAllocator(soup, 'x-')

        ids = [allocator.ensure_id(p) for p in soup.find_all('p')]
        again = [allocator.ensure_id(p) for p in soup.find_all('p')]

        assert len(set(ids)) == 3
        assert ids == again

    def test_ids_added_after_construction(self):
        """Test ids added to the tree later are also avoided."""
        soup = BeautifulSoup('<p>A</p><p>B</p>', 'html.parser')
        allocator = IdentifierAllocator(soup, 'x-')
        first, second = soup.find_all('p')
        first['id'] = 'x-1'

        assert allocator.ensure_id(second) == 'x-2'

    def test_default_prefix(self):
        """Test an empty prefix falls back to the default."""
        soup = BeautifulSoup('<p>A</p>', 'html.parser')
        allocator = IdentifierAllocator(soup, '')

        assert allocator.ensure_id(soup.p) == 'id-a11y-1'
