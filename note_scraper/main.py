#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Note Scraper Main Script

This script provides a command-line interface for extracting structured
records from note pages, plus an interactive mode for collecting links.
"""

import os
import sys
import logging
import json
import argparse
from typing import List, Dict, Any, Optional, TextIO
from datetime import datetime

from note_scraper.core.errors import ConfigError
from note_scraper.core.models import ImageMergePolicy
from note_scraper.core.pipeline import NotePipeline
from note_scraper.ui.collector import UrlCollector
from note_scraper.utils.config_loader import DEFAULT_CONFIG, build_config, load_config
from note_scraper.utils.url_utils import ensure_scheme

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger('scraper')


def setup_argparse() -> argparse.ArgumentParser:
    """
    Set up command-line argument parsing.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description='Extract title, text, images and video from social media note pages',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Add main arguments
    parser.add_argument('urls', nargs='*', help='Note page URLs to extract')
    parser.add_argument('--url-file', help='File containing URLs to extract (one per line)')
    parser.add_argument('--html-file',
                        help='Extract from a saved HTML file instead of fetching (uses the first URL as its address)')
    parser.add_argument('-o', '--output', help='Write results as JSON to this file instead of stdout')
    parser.add_argument('--config', help='YAML configuration file')

    # Add extraction options
    parser.add_argument('--image-policy', choices=[p.value for p in ImageMergePolicy],
                        help='Where the image list comes from (default: %s)' % DEFAULT_CONFIG['image_policy'])
    parser.add_argument('--title-suffix', help='Site suffix stripped from meta titles')

    # Add request options
    parser.add_argument('--user-agent', help='Custom User-Agent string')
    parser.add_argument('--proxy', help='Proxy to use (format: protocol://host:port)')
    parser.add_argument('--timeout', type=float, help='Request timeout in seconds')
    parser.add_argument('--workers', type=int, help='Number of parallel fetches')

    # Add other options
    parser.add_argument('--collect', action='store_true',
                        help='Start the interactive link collector')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')
    parser.add_argument('--log-file', help='Also write logs to this file')

    return parser


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure root logging for the command-line tool.

    Args:
        verbose: Whether to log at DEBUG level
        log_file: Optional file to write logs to as well
    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )

    # Keep urllib3 connection chatter out of verbose output
    logging.getLogger('urllib3').setLevel(logging.WARNING)


def get_urls_from_file(filename: str) -> List[str]:
    """
    Read URLs from a file.

    Args:
        filename: Path to a file containing URLs (one per line)

    Returns:
        List of URLs; blank lines and lines starting with # are skipped
    """
    urls = []
    with open(filename, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#'):
                urls.append(line)
    return urls


def build_runtime_config(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Merge the config file (if any) with command-line overrides.

    Args:
        args: Command-line arguments

    Returns:
        Complete configuration dictionary

    Raises:
        ConfigError: If the config file or an override is invalid
    """
    config = load_config(args.config) if args.config else dict(DEFAULT_CONFIG)

    overrides = {
        'image_policy': args.image_policy,
        'title_suffix': args.title_suffix,
        'user_agent': args.user_agent,
        'proxy': args.proxy,
        'timeout': args.timeout,
        'max_workers': args.workers,
    }
    config.update({k: v for k, v in overrides.items() if v is not None})

    return build_config(config)


def run_extraction(urls: List[str], args: argparse.Namespace, config: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Extract records for the given URLs.

    Args:
        urls: URLs to process
        args: Command-line arguments
        config: Runtime configuration

    Returns:
        One result dictionary per URL
    """
    with NotePipeline(config) as pipeline:
        if args.html_file:
            with open(args.html_file, 'r', encoding='utf-8') as f:
                html = f.read()
            url = urls[0] if urls else args.html_file
            record = pipeline.extract_html(url, html)
            return [{
                'url': url,
                'crawl_time': datetime.now().isoformat(),
                'status': 'success',
                'data': record.to_dict()
            }]

        return pipeline.extract_many(urls, show_progress=len(urls) > 1 and sys.stderr.isatty())


def save_results(results: List[Dict[str, Any]], output: Optional[str]) -> None:
    """
    Write results as JSON.

    Args:
        results: Extracted data
        output: Target file path, or None for stdout
    """
    payload = json.dumps(results, indent=2, ensure_ascii=False)

    if not output:
        print(payload)
        return

    directory = os.path.dirname(output)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(output, 'w', encoding='utf-8') as f:
        f.write(payload)
        f.write('\n')

    logger.info(f"Results saved to {output}")


def run_collector(stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                  collector: Optional[UrlCollector] = None) -> None:
    """
    Interactive link collector.

    Any line is queued as a URL. Commands:
    :list shows the queue newest first, :open N opens entry N,
    :clear empties the queue and :quit exits.

    Args:
        stdin: Input stream (sys.stdin if None)
        stdout: Output stream (sys.stdout if None)
        collector: Collector to use (a new one if None)
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    if collector is None:
        collector = UrlCollector()

    def show() -> None:
        for index, item in enumerate(collector.items()):
            print(f"{index}: {item.url}", file=stdout)

    print("Enter URLs to collect (:list, :open N, :clear, :quit)", file=stdout)
    for line in stdin:
        command = line.strip()
        if not command:
            continue

        if command == ':quit':
            break
        elif command == ':list':
            show()
        elif command == ':clear':
            collector.clear()
            print("Cleared", file=stdout)
        elif command.startswith(':open'):
            try:
                index = int(command[len(':open'):].strip() or 0)
                print(f"Opened {collector.open(index)}", file=stdout)
            except (ValueError, IndexError) as e:
                print(f"Cannot open: {e}", file=stdout)
        else:
            collector.add(command)
            show()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the script.

    Args:
        argv: Command-line arguments (sys.argv if None)

    Returns:
        Process exit status
    """
    parser = setup_argparse()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.log_file)

    if args.collect:
        run_collector()
        return 0

    try:
        config = build_runtime_config(args)
    except ConfigError as e:
        logger.error(str(e))
        return 2

    urls = list(args.urls)
    if args.url_file:
        try:
            urls.extend(get_urls_from_file(args.url_file))
        except OSError as e:
            logger.error(f"Error reading URL file: {e}")
            return 2

    if not urls and not args.html_file:
        parser.print_help()
        return 1

    try:
        results = run_extraction([ensure_scheme(url) for url in urls], args, config)
    except OSError as e:
        logger.error(f"Error reading HTML file: {e}")
        return 2

    save_results(results, args.output)

    return 1 if any(r['status'] == 'error' for r in results) else 0


if __name__ == "__main__":
    sys.exit(main())
