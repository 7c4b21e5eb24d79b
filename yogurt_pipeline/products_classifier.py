"""
Products Classifier Module

Classify product titles as yogurt using keyword matching and derive the
plain flag for each record.
"""

import logging
import time
from typing import Iterable, List, Optional

from tqdm import tqdm

from yogurt_pipeline.config_models import Product, TransformedProduct, TransformResult


logger = logging.getLogger(__name__)


YOGURT_TERMS = frozenset({
    'yogurt',
    'skyr',
    'yoghurt',
})

# Terms that indicate the product is not a yogurt. "base" also matches words
# like "database" and "baseline".
EXCLUSION_TERMS = frozenset({
    'kefir',
    'alternative',
    'dairy-free',
    'dairy free',
    'non-dairy',
    'almondmilk',
    'cashewmilk',
    'coconut',
    'powder puff',
    'cushion puff',
    'drinkable',
    'strainer',
    'base',
    'starter culture',
    'extract',
})


def is_yogurt_product(title: str) -> bool:
    """
    Determine whether a product is a yogurt from its title.

    Parameters:
    -----------
    title : str
        Product title

    Returns:
    --------
    bool
        True only if the lowercased title contains a yogurt term and no
        exclusion term
    """
    title = title.lower()

    contains_yogurt_term = any(term in title for term in YOGURT_TERMS)
    if not contains_yogurt_term:
        return False

    contains_exclusion_term = any(term in title for term in EXCLUSION_TERMS)
    return not contains_exclusion_term


class ProductClassifier:
    """Keyword-based yogurt classifier over a batch of products."""

    def __init__(self, show_progress: bool = False):
        """
        Initialize the product classifier.

        Parameters:
        -----------
        show_progress : bool
            Display a tqdm progress bar while transforming records
        """
        self.show_progress = show_progress
        self.start_time: Optional[float] = None

    def transform_product(self, product: Product) -> TransformedProduct:
        """Classify one product and build its output record."""
        is_yogurt = is_yogurt_product(product.product_title)
        is_plain = product.is_plain_yogurt if is_yogurt else False

        return TransformedProduct(
            product_title=product.product_title,
            is_yogurt=is_yogurt,
            is_plain=is_plain,
            is_nonfat=product.is_nonfat,
            confidence=product.confidence,
        )

    def transform_products(self, products: Iterable[Product]) -> TransformResult:
        """
        Transform products in input order, counting yogurt and plain records.

        Parameters:
        -----------
        products : Iterable[Product]
            Decoded input products

        Returns:
        --------
        TransformResult
            One transformed record per input record plus the two counters
        """
        products = list(products)
        logger.info(f"Starting classification of {len(products)} records")
        self.start_time = time.time()

        result = TransformResult()
        for product in tqdm(products, desc="Classifying products", disable=not self.show_progress):
            transformed = self.transform_product(product)

            if transformed.is_yogurt:
                result.yogurt_count += 1
            if transformed.is_plain:
                result.plain_count += 1

            result.products.append(transformed)

        self.print_summary(result)

        return result

    def print_summary(self, result: TransformResult):
        """Log classification summary statistics."""
        logger.info("=== Classification Summary ===")

        total = result.total_count
        for label, count in (("yogurt", result.yogurt_count), ("plain", result.plain_count)):
            percentage = (count / total) * 100 if total else 0.0
            logger.info(f"  {label}: {count} ({percentage:.1f}%)")

        elapsed_time = time.time() - self.start_time if self.start_time else 0
        logger.info(f"  Processing time: {elapsed_time:.3f} seconds")


def classify_products(products: List[Product], show_progress: bool = False) -> TransformResult:
    """
    Classify and transform a list of products.

    Parameters:
    -----------
    products : List[Product]
        Decoded input products
    show_progress : bool
        Display a progress bar

    Returns:
    --------
    TransformResult
        Transformed records and yogurt/plain counts
    """
    classifier = ProductClassifier(show_progress=show_progress)
    return classifier.transform_products(products)
