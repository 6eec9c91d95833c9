import pytest
from pydantic import ValidationError
from hypothesis import given, strategies as st

from spotie.models.entities import Collection, page_offset


def _collection(offset, limit, total, count=None):
    if count is None:
        count = max(0, min(limit, total - offset))
    return Collection[int](offset=offset, limit=limit, total=total, items=list(range(count)))


@pytest.mark.unit
def test_middle_page_navigation():
    c = _collection(offset=20, limit=10, total=45)
    assert c.total_pages() == 5
    assert c.current_page() == 3
    assert c.has_next() is True
    assert c.has_previous() is True
    assert c.is_first() is False
    assert c.is_last() is False
    assert c.previous_page_offset() == 10
    assert c.next_page_offset() == 30
    assert c.first_page_offset() == 0
    assert c.last_page_offset() == 35


@pytest.mark.unit
def test_first_page():
    c = _collection(offset=0, limit=10, total=45)
    assert c.current_page() == 1
    assert c.is_first() is True
    assert c.has_previous() is False
    assert c.previous_page_offset() == -10


@pytest.mark.unit
def test_last_partial_page():
    c = _collection(offset=40, limit=10, total=45)
    assert len(c.items) == 5
    assert c.current_page() == 5
    assert c.is_last() is True
    assert c.has_next() is False
    assert c.next_page_offset() == 50


@pytest.mark.unit
def test_empty_result_set():
    c = _collection(offset=0, limit=10, total=0)
    assert c.total_pages() == 0
    assert c.current_page() == 1
    assert c.has_next() is False
    assert c.has_previous() is False
    assert c.is_first() is True
    assert c.is_last() is True
    assert c.last_page_offset() == -10


@pytest.mark.unit
def test_unaligned_offset_rounds_down_to_its_page():
    c = _collection(offset=15, limit=10, total=45)
    assert c.current_page() == 2


@pytest.mark.unit
def test_zero_limit_raises_on_page_arithmetic():
    c = Collection[int](offset=0, limit=0, total=5, items=[])
    with pytest.raises(ZeroDivisionError):
        c.total_pages()
    with pytest.raises(ZeroDivisionError):
        c.current_page()


@pytest.mark.unit
def test_collection_is_immutable_and_compared_by_value():
    a = _collection(offset=0, limit=10, total=3)
    b = _collection(offset=0, limit=10, total=3)
    assert a == b
    with pytest.raises(ValidationError):
        a.offset = 10


@pytest.mark.unit
def test_page_offset_translates_one_indexed_pages():
    assert page_offset(1, 10) == 0
    assert page_offset(3, 5) == 10
    assert page_offset(0, 10) == 0
    assert page_offset(-4, 10) == 0


@pytest.mark.unit
@given(
    limit=st.integers(min_value=1, max_value=50),
    page=st.integers(min_value=1, max_value=40),
    total=st.integers(min_value=0, max_value=2000),
)
def test_aligned_offsets_report_their_page(limit, page, total):
    offset = page_offset(page, limit)
    c = _collection(offset=offset, limit=limit, total=total, count=0)
    assert c.current_page() == page
    assert c.has_previous() == (page > 1)
    assert c.has_next() == (page < c.total_pages())
    assert c.next_page_offset() - c.previous_page_offset() == 2 * limit


@pytest.mark.unit
@given(
    limit=st.integers(min_value=1, max_value=50),
    total=st.integers(min_value=1, max_value=2000),
)
def test_walking_next_offsets_visits_every_page_once(limit, total):
    offset = 0
    pages = []
    while True:
        c = _collection(offset=offset, limit=limit, total=total)
        pages.append(c.current_page())
        if not c.has_next():
            break
        offset = c.next_page_offset()
    assert pages == list(range(1, c.total_pages() + 1))
    assert c.is_last() is True
