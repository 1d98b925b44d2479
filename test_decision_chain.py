"""Build-time decision chains and iteration combinators."""

import pytest

from conftest import Product


MILK = Product("Milk", "1001", perishable=True, price=1.5)
RICE = Product("Rice", "2002", perishable=False, price=25.0)


def recorder(fired: list, name: str):
    """Configure callback that records its name and adds a text element."""

    def configure(builder):
        fired.append(name)
        builder.add_text(name, 0, 0)

    return configure


def run_chain(make_builder, context):
    fired: list[str] = []
    (
        make_builder()
        .with_context(context)
        .if_(lambda p: p.perishable, recorder(fired, "a"), Product)
        .elif_(lambda p: p.price > 10, recorder(fired, "b"), Product)
        .else_(recorder(fired, "c"))
    )
    return fired


def test_first_matching_branch_fires(make_builder):
    assert run_chain(make_builder, MILK) == ["a"]


def test_elif_fires_when_if_fails(make_builder):
    assert run_chain(make_builder, RICE) == ["b"]


def test_else_fires_when_nothing_matches(make_builder):
    assert run_chain(make_builder, Product("Salt", "3003", price=0.5)) == ["c"]


def test_context_of_other_type_skips_predicates(make_builder):
    assert run_chain(make_builder, {"perishable": True}) == ["c"]


def test_missing_context_skips_predicates(make_builder):
    assert run_chain(make_builder, None) == ["c"]


def test_only_one_branch_fires_when_several_hold(make_builder):
    fired: list[str] = []
    (
        make_builder()
        .with_context(MILK)
        .if_(lambda p: True, recorder(fired, "a"))
        .elif_(lambda p: True, recorder(fired, "b"))
        .else_(recorder(fired, "c"))
    )
    assert fired == ["a"]


def test_branch_adds_elements(make_builder):
    label = (
        make_builder()
        .with_context(MILK)
        .if_(lambda p: p.perishable, lambda b: b.add_text("KEEP COLD", 0, 40), Product)
        .build()
    )
    assert [e.text for e in label.elements] == ["KEEP COLD"]


def test_back_to_back_chains_are_independent(make_builder):
    fired: list[str] = []
    (
        make_builder()
        .with_context(MILK)
        .if_(lambda p: False, recorder(fired, "a"))
        .else_(recorder(fired, "b"))
        .if_(lambda p: True, recorder(fired, "c"))
        .else_(recorder(fired, "d"))
    )
    assert fired == ["b", "c"]


def test_nested_chain_does_not_reset_outer_chain(make_builder):
    fired: list[str] = []

    def outer_branch(builder):
        fired.append("outer")
        builder.if_(lambda p: False, recorder(fired, "inner-if")).else_(recorder(fired, "inner-else"))

    (
        make_builder()
        .with_context(MILK)
        .if_(lambda p: True, outer_branch)
        .elif_(lambda p: True, recorder(fired, "outer-elif"))
        .else_(recorder(fired, "outer-else"))
    )
    assert fired == ["outer", "inner-else"]


def test_elif_without_if_is_rejected(make_builder):
    with pytest.raises(ValueError):
        make_builder().elif_(lambda p: True, lambda b: None)
    with pytest.raises(ValueError):
        make_builder().else_(lambda b: None)


def test_missing_callbacks_are_rejected(make_builder):
    builder = make_builder().with_context(MILK)
    with pytest.raises(ValueError):
        builder.if_(lambda p: True, None)
    with pytest.raises(ValueError):
        builder.if_(None, lambda b: None)

    builder.if_(lambda p: True, lambda b: None)
    with pytest.raises(ValueError):
        builder.elif_(lambda p: True, None)
    with pytest.raises(ValueError):
        builder.else_(None)


def test_generate_closes_the_chain(make_builder):
    images = []
    builder = make_builder().with_context(MILK).if_(lambda p: False, lambda b: None)
    builder.generate(images.append)

    assert len(images) == 1
    with pytest.raises(ValueError):
        builder.else_(lambda b: None)


# ============================================================================
# Iteration
# ============================================================================

def test_for_range_is_half_open(make_builder):
    seen: list[int] = []
    make_builder().for_range(2, 5, lambda b, i: seen.append(i))
    assert seen == [2, 3, 4]


def test_for_range_empty(make_builder):
    seen: list[int] = []
    make_builder().for_range(3, 3, lambda b, i: seen.append(i))
    assert seen == []


def test_for_range_adds_rows(make_builder):
    label = make_builder().for_range(0, 3, lambda b, i: b.add_text(f"row {i}", 5, i * 15, size=10)).build()
    assert [e.text for e in label.elements] == ["row 0", "row 1", "row 2"]
    assert [e.y for e in label.elements] == [0, 15, 30]


def test_for_each_in_order(make_builder):
    label = (
        make_builder()
        .for_each([MILK, RICE], lambda b, p: b.add_text(p.name, 5, 0, size=10))
        .build()
    )
    assert [e.text for e in label.elements] == ["Milk", "Rice"]


def test_for_each_accepts_generators(make_builder):
    seen: list[str] = []
    make_builder().for_each((p.sku for p in [MILK, RICE]), lambda b, sku: seen.append(sku))
    assert seen == ["1001", "2002"]


def test_for_each_requires_items(make_builder):
    with pytest.raises(ValueError):
        make_builder().for_each(None, lambda b, item: None)


def test_context_is_exposed(make_builder):
    assert make_builder().with_context(RICE).context is RICE
