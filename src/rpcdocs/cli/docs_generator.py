import argparse
import logging
import os
import sys
from typing import List, Optional

from rpcdocs.cli.config import CONFIG_FILE_NAME, DocsConfig, load_config
from rpcdocs.errors import MethodResolutionError, RpcDocsError
from rpcdocs.extract import load_http_rules, merge_http_rules
from rpcdocs.render import Templates
from rpcdocs.service import ApiDefinition, DescriptorSetExtractor, load_descriptor_set

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")


def load_api(descriptor_set_path: str, config: DocsConfig) -> ApiDefinition:
    http_rules = merge_http_rules(load_http_rules(p) for p in config.http_rules)
    extractor = DescriptorSetExtractor(source_url=config.source_url, http_rules=http_rules)
    return extractor.extract(load_descriptor_set(descriptor_set_path))


def generate_docs(descriptor_set_path: str, config: DocsConfig) -> List[str]:
    """Extract the API from a descriptor set and render one file per method."""
    api = load_api(descriptor_set_path, config)
    templates = Templates(config.templates_dir)
    return api.export_markdown(config.output_dir, templates, config.extension)


def resolve_config(args: argparse.Namespace) -> DocsConfig:
    if args.config:
        config = load_config(args.config)
    elif os.path.isfile(CONFIG_FILE_NAME):
        config = load_config(CONFIG_FILE_NAME)
    else:
        config = DocsConfig()

    if args.output:
        config.output_dir = args.output
    if args.source_url is not None:
        config.source_url = args.source_url
    if args.templates:
        config.templates_dir = args.templates
    if args.http_rules:
        config.http_rules.extend(args.http_rules)
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rpcdocs",
        description="Generate per-method API documentation from a protobuf descriptor set.",
    )
    parser.add_argument(
        "descriptor_set",
        type=str,
        help="FileDescriptorSet written by protoc --include_source_info --descriptor_set_out.",
    )
    parser.add_argument("--config", type=str, help=f"Config file (default: ./{CONFIG_FILE_NAME} if present).")
    parser.add_argument("--output", type=str, help="Output directory.")
    parser.add_argument("--source-url", type=str, help="Base URL prepended to source locations.")
    parser.add_argument("--templates", type=str, help="Directory with replacement templates.")
    parser.add_argument(
        "--http-rules",
        type=str,
        action="append",
        default=[],
        help="grpc-gateway service YAML with HTTP rules; may be repeated.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = resolve_config(args)
        api = load_api(args.descriptor_set, config)
        templates = Templates(config.templates_dir)
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    except RpcDocsError as exc:
        logger.error("failed to load %s: %s", args.descriptor_set, exc)
        return 1

    # Rendering errors are not caught here; only inconsistent definitions are.
    try:
        written = api.export_markdown(config.output_dir, templates, config.extension)
    except MethodResolutionError as exc:
        logger.error("failed to generate docs from %s: %s", args.descriptor_set, exc)
        return 1

    logger.info("Wrote %d files to %s", len(written), config.output_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
