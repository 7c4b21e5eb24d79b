"""
Yogurt Pipeline Runner

Orchestrates the complete transform workflow:
1. Data loading
2. Product classification
3. Output generation
4. Helper utilities (optional flat CSV export)
"""

import argparse
import logging
import sys
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

import dotenv

from yogurt_pipeline.config_models import PipelineSettings, load_settings
from yogurt_pipeline.data_loader import load_products
from yogurt_pipeline.exceptions import PipelineError
from yogurt_pipeline.output_writer import save_products
from yogurt_pipeline.products_classifier import classify_products
from yogurt_pipeline.utils.flat_export import export_flat_csv


logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
USAGE = "Usage: yogurt-transform input.json output.json"


# Load environment variables from nearest .env (workspace root)
DOTENV_PATH = dotenv.find_dotenv(usecwd=True)
if DOTENV_PATH:
    dotenv.load_dotenv(DOTENV_PATH)
else:
    dotenv.load_dotenv()


def setup_logging(settings: PipelineSettings) -> None:
    """Configure root logging: console always, log file when configured."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding='utf-8'))

    logging.basicConfig(
        level=settings.numeric_log_level(),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def run_pipeline(
    input_path: str,
    output_path: str,
    flat_csv: Optional[str] = None,
    show_progress: bool = False,
) -> Dict[str, Any]:
    """
    Run the complete transform pipeline.

    Parameters:
    -----------
    input_path : str
        Path to the input products JSON
    output_path : str
        Path where the transformed JSON is written
    flat_csv : str, optional
        Also export the transformed products as a flat CSV
    show_progress : bool
        Display a progress bar during classification

    Returns:
    --------
    Dict[str, Any]
        Pipeline execution summary. On failure ``status`` is ``'failed'`` and
        ``diagnostic`` holds the one-line message for the console.
    """
    start_time = time.time()
    logger.info("=" * 80)
    logger.info("YOGURT PRODUCT TRANSFORM PIPELINE")
    logger.info("=" * 80)
    logger.info(f"Start time: {datetime.now().isoformat()}")
    logger.info(f"Input: {input_path}")
    logger.info(f"Output: {output_path}")

    results: Dict[str, Any] = {
        'status': 'success',
        'steps_completed': [],
        'errors': [],
        'timing': {}
    }

    try:
        # Step 1: Data Loading
        logger.info("STEP 1: DATA LOADING")
        step_start = time.time()

        products = load_products(input_path)
        print(f"Successfully parsed {len(products)} products")
        results['steps_completed'].append('data_loading')
        results['data_loading'] = {'records': len(products)}
        results['timing']['data_loading'] = time.time() - step_start

        # Step 2: Product Classification
        logger.info("STEP 2: PRODUCT CLASSIFICATION")
        step_start = time.time()

        transform_result = classify_products(products, show_progress=show_progress)
        total = transform_result.total_count
        print(f"Total yogurt products: {transform_result.yogurt_count} out of {total}")
        print(f"Total plain products: {transform_result.plain_count} out of {total}")
        results['steps_completed'].append('product_classification')
        results['product_classification'] = {
            'records': total,
            'yogurt': transform_result.yogurt_count,
            'plain': transform_result.plain_count,
        }
        results['timing']['product_classification'] = time.time() - step_start

        # Step 3: Output Generation
        logger.info("STEP 3: OUTPUT GENERATION")
        step_start = time.time()

        save_products(transform_result.products, output_path)
        print(f"Transformation complete! Data written to {output_path}")
        results['steps_completed'].append('output_generation')
        results['timing']['output_generation'] = time.time() - step_start

    except PipelineError as e:
        logger.info(f"✗ Step {e.step} failed: {e.cause}")
        results['errors'].append(f'{e.step}: {e.cause}')
        results['status'] = 'failed'
        results['diagnostic'] = str(e)
        return results

    # Step 4: Helper Utilities (Optional)
    if flat_csv:
        logger.info("STEP 4: HELPER UTILITIES")
        step_start = time.time()

        try:
            export_flat_csv(transform_result, flat_csv)
            logger.info(f"✓ Flat CSV created: {flat_csv}")
            results['steps_completed'].append('flat_export')
        except Exception as e:
            logger.warning(f"Flat CSV export failed: {str(e)}")
            results['errors'].append(f'flat_export: {str(e)}')

        results['timing']['helpers'] = time.time() - step_start

    # Summary
    total_time = time.time() - start_time
    results['timing']['total'] = total_time

    logger.info("=" * 80)
    logger.info("PIPELINE EXECUTION SUMMARY")
    logger.info("=" * 80)
    logger.info(f"Status: {results['status'].upper()}")
    logger.info(f"Steps completed: {', '.join(results['steps_completed'])}")
    if results['errors']:
        logger.info(f"Errors: {len(results['errors'])}")
        for error in results['errors']:
            logger.info(f"  - {error}")
    logger.info(f"Total execution time: {total_time:.2f} seconds")

    return results


class PipelineArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message):
        print(USAGE)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> PipelineArgumentParser:
    parser = PipelineArgumentParser(
        prog='yogurt-transform',
        description="Classify yogurt products and write a transformed JSON array",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example usage:
  yogurt-transform ./products.json ./products_transformed.json
  yogurt-transform -- -products.json -out.json   (paths starting with "-")

Environment:
  YOGURT_PIPELINE_LOG_LEVEL  log level (default: WARNING)
  YOGURT_PIPELINE_LOG_FILE   also write logs to this file
  YOGURT_PIPELINE_PROGRESS   set to 1 to show a progress bar
        """
    )

    # Required arguments
    parser.add_argument('input', help='Input products JSON path')
    parser.add_argument('output', help='Output JSON path (overwritten)')

    # Optional arguments
    parser.add_argument(
        '--flat-csv',
        default=None,
        help='Also write the transformed products as a flat CSV to this path'
    )
    parser.add_argument(
        '--progress',
        action='store_true',
        help='Show a progress bar while classifying'
    )
    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default=None,
        help='Logging level (default: WARNING)'
    )

    return parser


def main(argv: Optional[List[str]] = None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    if args.log_level:
        settings.log_level = args.log_level
    if args.progress:
        settings.show_progress = True

    try:
        setup_logging(settings)
    except ValueError as e:
        print(f"Error configuring logging: {e}")
        sys.exit(1)
    except OSError as e:
        print(f"Error opening log file: {e}")
        sys.exit(1)

    # Run pipeline
    try:
        results = run_pipeline(
            input_path=args.input,
            output_path=args.output,
            flat_csv=args.flat_csv,
            show_progress=settings.show_progress,
        )

        if results['status'] == 'failed':
            print(results['diagnostic'])
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("\nPipeline interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Pipeline failed with error: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
