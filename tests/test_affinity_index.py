from marketplace.allocation import CategoryAffinityIndex


def test_lookup_groups_sellers_in_input_order(seller_factory):
    sellers = [
        seller_factory(1, main_category="ao-thun"),
        seller_factory(2, main_category="quan-jean"),
        seller_factory(3, main_category="ao-thun"),
        seller_factory(4),
    ]
    index = CategoryAffinityIndex.build(sellers)
    assert [seller.id for seller in index.lookup("ao-thun")] == [1, 3]
    assert [seller.id for seller in index.lookup("quan-jean")] == [2]
    assert index.categories() == ["ao-thun", "quan-jean"]
    assert len(index) == 2


def test_lookup_unknown_category_is_empty(seller_factory):
    index = CategoryAffinityIndex.build([seller_factory(1)])
    assert index.lookup("vay") == ()
    assert "vay" not in index
    assert len(index) == 0
