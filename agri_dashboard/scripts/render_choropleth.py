"""
Render a choropleth SVG from a running dashboard API.
Useful for snapshots and for checking a deployment end to end.
"""
import argparse
import logging
import sys

from ..client import DashboardAPIError, DashboardClient
from ..config import settings
from ..data.datasets import DATASETS, get_dataset
from ..visualization.layers import resolve_parameter
from ..visualization.processor import ChoroplethProcessor

logger = logging.getLogger(__name__)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Render a choropleth map to SVG")
    parser.add_argument("dataset", choices=sorted(DATASETS), help="Metric dataset to shade by")
    parser.add_argument("--parameter", help="Metric column (defaults to the layer's default)")
    parser.add_argument("--year", type=int, help="Data year (defaults to the dataset's default)")
    parser.add_argument("--color", default=settings.DEFAULT_BASE_COLOR, help="Base hex color")
    parser.add_argument("--bins", type=int, default=settings.DEFAULT_COLOR_BINS, help="Number of color bins")
    parser.add_argument("--base-url", default=settings.API_BASE_URL, help="Dashboard API base URL")
    parser.add_argument("--output", "-o", default="choropleth.svg", help="Output SVG path")
    return parser.parse_args(argv)

def render(args) -> int:
    dataset = get_dataset(args.dataset)
    parameter = resolve_parameter(dataset.layer, args.parameter)
    client = DashboardClient(base_url=args.base_url)

    try:
        features = client.fetch_features(dataset.level)
        records = client.fetch_records(dataset.key, args.year)
    except DashboardAPIError as e:
        logger.error(f"❌ Failed to load map data: {e}")
        return 1

    processor = ChoroplethProcessor()
    choropleth = processor.build(
        features, records, dataset.level, parameter, args.color, args.bins, layer=dataset.layer.value,
    )

    with open(args.output, "w", encoding="utf-8") as f:
        f.write(processor.to_svg(choropleth))

    logger.info(f"✅ Wrote {len(choropleth.features)} {dataset.level.value} features to {args.output}")
    return 0

def main():
    sys.exit(render(parse_args()))

if __name__ == "__main__":
    main()
