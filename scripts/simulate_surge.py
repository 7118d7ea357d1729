#!/usr/bin/env python3
"""Run a StableSurge scenario and print each swap's outcome.

Usage:
    # Run a scenario file
    python scripts/simulate_surge.py --scenario tests/fixtures/scenarios/surge_two_token.json

    # Override fee parameters from the environment
    STABLESURGE_MAX_SURGE_FEE=5 python scripts/simulate_surge.py \\
        --balances 1000 1000 --swap 0 1 500

Prints one JSON object per swap, followed by the final pool state.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from stablesurge.constants import DEFAULT_AMPLIFICATION  # noqa: E402
from stablesurge.errors import StableSurgeError  # noqa: E402
from stablesurge.fees.config import SurgeFeeConfig  # noqa: E402
from stablesurge.models import PoolScenario, SwapRequest, load_scenario  # noqa: E402

logger = structlog.get_logger()


def scenario_from_args(args: argparse.Namespace) -> PoolScenario:
    """Build a scenario from --balances/--swap, with fees from the environment."""
    config = SurgeFeeConfig.from_env()
    return PoolScenario(
        amplification=args.amplification,
        balances=args.balances,
        static_fee_percentage=config.static_fee_percentage,
        max_surge_fee_percentage=config.max_surge_fee_percentage,
        surge_threshold_percentage=config.surge_threshold_percentage,
        swaps=[
            SwapRequest(token_in=int(token_in), token_out=int(token_out), amount_in=amount_in)
            for token_in, token_out, amount_in in args.swap or []
        ],
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Simulate swaps on a StableSurge pool")
    parser.add_argument(
        "--scenario",
        type=Path,
        default=None,
        help="JSON scenario file (pool parameters and swaps)",
    )
    parser.add_argument(
        "--balances",
        type=float,
        nargs="+",
        default=None,
        help="Initial pool balances (used when --scenario is not given)",
    )
    parser.add_argument(
        "--amplification",
        type=float,
        default=DEFAULT_AMPLIFICATION,
        help=f"Amplification coefficient (default: {DEFAULT_AMPLIFICATION:g})",
    )
    parser.add_argument(
        "--swap",
        type=float,
        nargs=3,
        action="append",
        metavar=("TOKEN_IN", "TOKEN_OUT", "AMOUNT_IN"),
        help="Swap to run; may be repeated",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        # Keep stdout for the JSON output
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )

    if args.scenario is None and args.balances is None:
        print("Error: one of --scenario or --balances must be provided")
        return 1

    try:
        if args.scenario is not None:
            if not args.scenario.exists():
                logger.error("scenario_not_found", path=str(args.scenario))
                print(f"Error: Scenario file not found: {args.scenario}")
                return 1
            scenario = load_scenario(args.scenario)
        else:
            scenario = scenario_from_args(args)

        previews, final_state = scenario.run()
    except (ValidationError, StableSurgeError, IndexError, ValueError) as e:
        logger.error("scenario_failed", error=str(e))
        print(f"Error: {e}")
        return 1

    for preview in previews:
        print(
            json.dumps(
                {
                    "tokenIn": preview.token_in,
                    "tokenOut": preview.token_out,
                    "amountIn": preview.amount_in,
                    "amountOut": preview.amount_out,
                    "fee": preview.fee,
                    "feePercentage": preview.fee_percentage,
                }
            )
        )
    print(
        json.dumps(
            {
                "balances": list(final_state.balances),
                "collectedFees": list(final_state.collected_fees),
                "invariant": final_state.invariant,
                "imbalance": final_state.imbalance,
            }
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
