# main.py
import asyncio
import argparse
import json
import logging
from dataclasses import replace

import yaml

from .config import build_config, load_config
from .handler import run_validation


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Probe interactive page elements for accessibility')
    parser.add_argument('--url', help='Page to probe')
    parser.add_argument('--selector', help='Element to wait for before probing')
    parser.add_argument('--config', help='YAML file with targets and settings')
    parser.add_argument('--headful', action='store_true', help='Show browser')
    parser.add_argument('--screenshot', action='store_true', help='Screenshot the anchor element')
    parser.add_argument('--upload', action='store_true', help='Upload the screenshot to S3')
    parser.add_argument('--bucket', help='S3 bucket for screenshots')
    parser.add_argument('--region', help='AWS region')
    parser.add_argument('--settle-ms', type=int, help='Wait after each interaction')
    parser.add_argument('--poll', action='store_true', help='Poll until the DOM is stable instead of a fixed wait')
    parser.add_argument('--format', choices=['json', 'yaml'], default='json', help='Report format')
    parser.add_argument('--output', help='Write the report to this file instead of stdout')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')
    return parser.parse_args(argv)


def config_from_args(args):
    config = build_config(
        load_config(args.config) if args.config else None,
        target_url=args.url,
        anchor_selector=args.selector,
        s3_bucket=args.bucket,
        aws_region=args.region,
        headful=args.headful or None,
        screenshot=args.screenshot or args.upload or None,
        upload=args.upload or None,
    )
    if args.settle_ms is not None:
        config['settings'] = replace(config['settings'], settle_delay_ms=args.settle_ms)
    if args.poll:
        config['settings'] = replace(config['settings'], poll_until_stable=True)
    return config


def render(report, fmt: str) -> str:
    data = report.to_dict()
    if fmt == 'yaml':
        return yaml.safe_dump(data, allow_unicode=True, default_flow_style=False, sort_keys=False)
    return json.dumps(data, ensure_ascii=False, indent=2)


async def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose or args.headful else logging.INFO, format='%(asctime)s %(levelname)-5s %(message)s', datefmt='%Y-%m-%d %H:%M:%S')

    report = await run_validation(config_from_args(args))
    text = render(report, args.format)
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(text)
    else:
        print(text)
    return report


def run():
    asyncio.run(main())

if __name__ == '__main__':
    run()
