"""
Run configuration.

A run is described by a plain dict (the same shape the CLI and the handler
build). Values come from, in increasing priority: constants, a YAML file,
environment variables, explicit overrides.
"""
import os
from dataclasses import fields
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .constants import (
    TARGET_URL, ANCHOR_SELECTOR, DEFAULT_TARGETS, S3_BUCKET, AWS_REGION,
    SCREENSHOT_DIR, TIMEOUT_NAVIGATION, TIMEOUT_SELECTOR,
)
from .models import InteractionSpec, ProbeSettings, ProbeTarget


def load_config(path: str) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def parse_settings(data: Optional[Mapping[str, Any]]) -> ProbeSettings:
    if not data:
        return ProbeSettings()
    known = {f.name for f in fields(ProbeSettings)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown probe settings: {', '.join(sorted(unknown))}")
    return ProbeSettings(**data)


def parse_targets(data: Mapping[str, Mapping[str, Any]]) -> List[ProbeTarget]:
    targets = []
    for name, item in data.items():
        interaction = item.get('interaction')
        targets.append(ProbeTarget(
            name=name,
            selector=item['selector'],
            description=item.get('description'),
            child_selector=item.get('child_selector'),
            interaction=InteractionSpec.from_dict(interaction) if interaction else None,
        ))
    return targets


def build_config(file_config: Optional[Mapping[str, Any]] = None, **overrides) -> Dict[str, Any]:
    file_config = dict(file_config or {})
    config = {
        'target_url': file_config.get('url', TARGET_URL),
        'anchor_selector': file_config.get('selector', ANCHOR_SELECTOR),
        'headful': file_config.get('headful', False),
        'screenshot': file_config.get('screenshot', False),
        'upload': file_config.get('upload', False),
        's3_bucket': os.environ.get('AWS_S3_BUCKET') or file_config.get('bucket', S3_BUCKET),
        'aws_region': os.environ.get('AWS_REGION') or file_config.get('region', AWS_REGION),
        'screenshot_dir': file_config.get('screenshot_dir', SCREENSHOT_DIR),
        'timeout_navigation': file_config.get('timeout_navigation', TIMEOUT_NAVIGATION),
        'timeout_selector': file_config.get('timeout_selector', TIMEOUT_SELECTOR),
        'settings': parse_settings(file_config.get('settings')),
        'targets': parse_targets(file_config.get('targets') or DEFAULT_TARGETS),
    }
    for key, value in overrides.items():
        if value is not None:
            config[key] = value
    return config
