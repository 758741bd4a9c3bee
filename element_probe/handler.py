# handler.py
import asyncio
import json
from typing import Any, Dict, Optional

from .config import build_config
from .constants import logger
from .report import build_accessibility_report
from .runner import ElementValidator
from .utils import utc_timestamp


async def run_validation(config: Dict[str, Any]):
    async with ElementValidator(config) as validator:
        return await validator.run()


def handler(event: Optional[Dict[str, Any]], context: Any = None) -> Dict[str, Any]:
    """Lambda-style entry point. Always answers with a response dict."""
    event = event or {}
    status_code = 200
    config = None
    body: Dict[str, Any]
    try:
        config = build_config(
            target_url=event.get('url'),
            anchor_selector=event.get('selector'),
            screenshot=True,
            upload=True,
        )
        report = asyncio.run(run_validation(config))
        body = report.to_dict()
    except Exception as e:
        logger.exception(f"Validation run failed: {e}")
        status_code = 500
        # same keys as a successful body, with nothing measured
        body = {
            'message': f"Error: {e}",
            'timestamp': utc_timestamp(),
            'screenshotUrl': None,
            'accessibilityReport': build_accessibility_report([]).to_dict(),
            'divTests': {target.name: None for target in config['targets']} if config else {},
        }
    body['event'] = event
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body, ensure_ascii=False),
    }
