"""
Tests for keyword-based yogurt classification and the batch transform.
"""

import pytest

from yogurt_pipeline.config_models import Product, TransformedProduct
from yogurt_pipeline.products_classifier import (
    EXCLUSION_TERMS,
    YOGURT_TERMS,
    ProductClassifier,
    classify_products,
    is_yogurt_product,
)


@pytest.mark.parametrize("title", [
    "Chobani Plain Yogurt",
    "Siggi's Skyr",
    "Greek YOGHURT 500g",
    "Fage Total 0% yogurt",
    "ICELANDIC SKYR VANILLA",
])
def test_yogurt_terms_classify_true(title):
    assert is_yogurt_product(title) is True


@pytest.mark.parametrize("title", [
    "Coconut Yogurt Alternative",
    "Lifeway Kefir Yogurt Drink",
    "Dairy-Free Yogurt",
    "dairy free yoghurt",
    "Non-Dairy Skyr",
    "Almondmilk Yogurt",
    "Cashewmilk Yogurt",
    "Yogurt Powder Puff",
    "Yogurt Cushion Puff",
    "Drinkable Yogurt",
    "Greek Yogurt Strainer",
    "Yogurt Starter Culture",
    "Vanilla Extract for Yogurt",
])
def test_exclusion_terms_dominate(title):
    assert is_yogurt_product(title) is False


def test_every_exclusion_term_blocks_a_yogurt_title():
    for term in EXCLUSION_TERMS:
        assert is_yogurt_product(f"Plain Yogurt {term}") is False
        assert is_yogurt_product(f"{term.upper()} SKYR") is False


def test_every_yogurt_term_matches_case_insensitively():
    for term in YOGURT_TERMS:
        assert is_yogurt_product(term.upper())
        assert is_yogurt_product(f"Brand {term.title()} Cup")


@pytest.mark.parametrize("title", ["", "Organic Whole Milk", "Cottage Cheese", "Frozen Yog"])
def test_titles_without_yogurt_terms_classify_false(title):
    assert is_yogurt_product(title) is False


def test_base_term_matches_inside_longer_words():
    assert is_yogurt_product("Yogurt Database Entry") is False
    assert is_yogurt_product("Baseline Yogurt") is False


def test_transform_product_forces_plain_false_for_non_yogurt():
    classifier = ProductClassifier()
    product = Product(product_title="Coconut Yogurt Alternative", is_plain_yogurt=True, confidence=0.4, is_nonfat=True)

    transformed = classifier.transform_product(product)

    assert transformed == TransformedProduct(
        product_title="Coconut Yogurt Alternative",
        is_yogurt=False,
        is_plain=False,
        is_nonfat=True,
        confidence=0.4,
    )


def test_skyr_keeps_input_plain_flag():
    transformed = ProductClassifier().transform_product(
        Product(product_title="Siggi's Skyr", is_plain_yogurt=False, confidence=0.8, is_nonfat=False)
    )
    assert transformed.is_yogurt is True
    assert transformed.is_plain is False


def test_transform_products_counts_and_order():
    products = [
        Product("Chobani Plain Yogurt", True, 0.9, False),
        Product("Coconut Yogurt Alternative", True, 0.4, False),
        Product("Siggi's Skyr", False, 0.75, True),
        Product("Organic Whole Milk", True, 0.1, False),
        Product("Greek Yoghurt", True, 1.5, True),
    ]

    result = classify_products(products)

    assert result.total_count == len(products)
    assert [p.product_title for p in result.products] == [p.product_title for p in products]
    assert [p.is_yogurt for p in result.products] == [True, False, True, False, True]
    assert [p.is_plain for p in result.products] == [True, False, False, False, True]
    assert result.yogurt_count == 3
    assert result.plain_count == 2


def test_transform_products_copies_confidence_and_nonfat_unchanged():
    products = [
        Product("Yogurt A", False, -3.25, True),
        Product("Milk B", True, 1e10, False),
        Product("Skyr C", True, 7, True),
    ]

    result = classify_products(products)

    for source, transformed in zip(products, result.products):
        assert transformed.confidence == source.confidence
        assert type(transformed.confidence) is type(source.confidence)
        assert transformed.is_nonfat == source.is_nonfat


def test_plain_is_never_true_without_yogurt():
    products = [Product(title, True, 0.5, False) for title in ["Milk", "Kefir Yogurt", "Coconut Skyr", "Yogurt"]]
    result = classify_products(products)

    for transformed in result.products:
        if not transformed.is_yogurt:
            assert transformed.is_plain is False


def test_transform_products_empty_input():
    result = classify_products([])

    assert result.products == []
    assert result.total_count == 0
    assert result.yogurt_count == 0
    assert result.plain_count == 0


def test_transform_products_with_progress_bar(capsys):
    result = ProductClassifier(show_progress=True).transform_products([Product("Skyr", True, 0.5, False)])

    assert result.yogurt_count == 1
    assert "Classifying products" in capsys.readouterr().err
