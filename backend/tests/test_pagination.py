from cookbook_api.services.pagination import page_meta


def test_no_limit_reports_everything_as_one_page():
    meta = page_meta(total=7, returned=7, limit=0, skip=0)

    assert meta == {"total_items": 7, "item_count": 7, "items_per_page": 7}


def test_item_count_reports_requested_limit_even_when_fewer_remain():
    meta = page_meta(total=7, returned=2, limit=10, skip=5)

    assert meta["item_count"] == 10
    assert meta["items_per_page"] == 2


def test_items_per_page_is_capped_by_limit():
    meta = page_meta(total=50, returned=10, limit=10, skip=0)

    assert meta["items_per_page"] == 10


def test_skip_past_the_end_yields_empty_page():
    meta = page_meta(total=3, returned=0, limit=10, skip=30)

    assert meta["items_per_page"] == 0
    assert meta["total_items"] == 3
