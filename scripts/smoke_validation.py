#!/usr/bin/env python3
"""Lazy-validation smoke test (no real env, no files).

Builds a small config tree from a fake source with a couple of bad
values and checks that validate() reports all of them at once.

Usage:
    ./.venv/bin/python -m scripts.smoke_validation
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from envutils import EnvUtils, EnvValidationError, ShortEnvNames

logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

HISTORY_SIZES: Dict[ShortEnvNames, int] = {'dev': 50, 'test': 50, 'prod': 200}

FAKE_SOURCE = {
    'APP_ENV': 'prod',
    'SVC_TRADING_PAIRS': 'XBTUSD,ETHUSD',
    'SVC_DRY_RUN': 'maybe',
    'SVC_API_CALL_DELAY': '3.0',
    'SVC_ORDER_SIZES': 'XBTUSD:0.0002,ETHUSD',
}


def build_config(utils: EnvUtils) -> Dict[str, Any]:
    env = utils.env
    return {
        'trading_pairs': env.TRADING_PAIRS.as_array().get(),
        'dry_run': env.DRY_RUN.as_boolean().get({'*': True}),
        'api_call_delay': env.API_CALL_DELAY.as_float().get(),
        'order_sizes': env.ORDER_SIZES.as_dict().get(),
        'history_size': env.HISTORY_SIZE.as_integer().get(HISTORY_SIZES),
        'api_key': env.API_KEY.get(),
        'log_file': env.LOG_FILE.optional().get(),
    }


def main() -> int:
    utils = EnvUtils(prefix='SVC_', source=FAKE_SOURCE, lazy_validation=True)
    config = build_config(utils)

    try:
        utils.validate(config)
    except EnvValidationError as e:
        logger.info(str(e))
        names = [err.config_name for err in e.errors]
        if names != ['DRY_RUN', 'ORDER_SIZES', 'API_KEY']:
            logger.error(f"Unexpected errors: {names}")
            return 1
        logger.info("OK: all config errors reported in one pass")
        return 0

    logger.error("Expected validation to fail")
    return 1


if __name__ == '__main__':
    raise SystemExit(main())
