"""
Flat Export

Write transformed products as a flat CSV table, one row per product.
"""

import pandas as pd

from yogurt_pipeline.config_models import OUTPUT_FIELDS, TransformResult, ensure_output_dir


def build_flat_dataframe(result: TransformResult) -> pd.DataFrame:
    """Return the transformed products as a DataFrame with columns in output order."""
    return pd.DataFrame(result.to_records(), columns=list(OUTPUT_FIELDS))


def export_flat_csv(result: TransformResult, output_csv: str) -> pd.DataFrame:
    """
    Export transformed products to a flat CSV file.

    Parameters:
    -----------
    result : TransformResult
        Output of the batch transform
    output_csv : str
        Path to write the CSV (parent directories are created)

    Returns:
    --------
    pd.DataFrame
        The exported table
    """
    ensure_output_dir(output_csv)

    df = build_flat_dataframe(result)
    df.to_csv(output_csv, index=False)
    print(f"Wrote {len(df)} products to {output_csv}")

    return df


if __name__ == "__main__":
    import argparse

    from yogurt_pipeline.data_loader import load_products
    from yogurt_pipeline.products_classifier import classify_products

    parser = argparse.ArgumentParser(description="Classify products and export them as a flat CSV.")
    parser.add_argument("--input", required=True, help="Path to the input products JSON")
    parser.add_argument("--output-csv", required=True, help="Path to write the flat CSV")
    args = parser.parse_args()

    export_flat_csv(classify_products(load_products(args.input)), args.output_csv)
