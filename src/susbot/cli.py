import argparse
import asyncio
import json
import os
from pathlib import Path
from typing import List, Optional

from .config import settings
from .models.scan import ScanResult
from .services.etherscan import is_valid_ethereum_address
from .services.scan_service import ContractScanService
from .utils.logger import setup_logger


def print_section_header(title):
    print(f"\n{'=' * 80}")
    print(f"{title}")
    print(f"{'=' * 80}")


def print_subsection_header(title):
    print(f"\n{'-' * 80}")
    print(f"{title}")
    print(f"{'-' * 80}")


def print_scan_result(result: ScanResult) -> None:
    print_subsection_header("Trust Score")
    print(f"{result.score}/100")

    print_subsection_header("Summary")
    print(result.summary)

    print_subsection_header("Risks")
    if result.risks:
        for idx, risk in enumerate(result.risks, 1):
            print(f"{idx}. {risk}")
    else:
        print("No risks found")


def is_error_result(result: ScanResult) -> bool:
    return result.score == 0 and not any(risk.startswith('[') for risk in result.risks)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='susbot',
        description='Scan Ethereum smart contracts for lexical security risk signals.',
    )
    parser.add_argument('addresses', nargs='*',
                        help='One or more contract addresses to scan (e.g., 0xbb9bc244d798123fde783fcc1c72d3bb8c189413)')
    parser.add_argument('--file', help='Scan a local source file instead of fetching from Etherscan')
    parser.add_argument('--name', help='Contract name to report when scanning a file')
    parser.add_argument('--api-key', help='Etherscan API key (optional, will use environment variable if not provided)')
    parser.add_argument('--json', action='store_true', help='Print results as JSON')
    parser.add_argument('--log-level', default=None, help='Logging level (default: LOG_LEVEL or INFO)')
    return parser


async def _run(args, service: ContractScanService) -> List[ScanResult]:
    if args.file:
        source_code = Path(args.file).read_text(encoding='utf-8')
        name = args.name or Path(args.file).stem
        return [await service.analyze_source(source_code, name)]
    return [await service.analyze_address(address) for address in args.addresses]


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.file and not args.addresses:
        parser.error("provide at least one address or --file")
    if args.file and args.addresses:
        parser.error("--file cannot be combined with addresses")
    if args.file and not Path(args.file).is_file():
        parser.error(f"file not found: {args.file}")

    # Set API key if provided
    if args.api_key:
        os.environ['ETHERSCAN_API_KEY'] = args.api_key
        settings.reload()

    setup_logger('susbot', log_level=args.log_level or settings.LOG_LEVEL, log_file=settings.LOG_FILE)

    invalid = [address for address in args.addresses if not is_valid_ethereum_address(address)]
    for address in invalid:
        print(f"Error: {address} - Invalid format. Must start with '0x' and be 42 characters long.")
    args.addresses = [address for address in args.addresses if address not in invalid]

    service = ContractScanService.from_settings()
    results = asyncio.run(_run(args, service))
    targets = [args.file] if args.file else args.addresses

    if args.json:
        payload = {target: result.to_dict() for target, result in zip(targets, results)}
        print(json.dumps(payload, indent=2))
    else:
        for target, result in zip(targets, results):
            print_section_header(f"Scan of {target}")
            print_scan_result(result)

    failed = bool(invalid) or any(is_error_result(result) for result in results)
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
