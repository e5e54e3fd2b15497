"""Utility functions for application configuration management.

Configuration is environment driven. Datastore connection details for each
Lambda live in a JSON document (path given by `CONFIG_FILE`, defaulting to
`<project root>/config/<APP_ENV>.json`) with this structure:

    {
        "active_backend": "redis",
        "configs": {
            "shorten_url": {
                "redis": { "host": "localhost", "port": 6379, "db": 0 }
            },
            "redirect_url": {
                "redis": { ... }
            },
            "cache": {
                "redis": { ... }
            }
        }
    }

The "cache" section is only read when CACHE_BACKEND=redis.

Cache tuning knobs are plain environment variables:

    CACHE_BACKEND       - 'redis' (shared, default when deployed) or 'memory'
                          (per-process, local runs only)
    CACHE_DEFAULT_TTL   - TTL applied when callers pass ttl=0/None (default 600)
    CACHE_CHECK_PERIOD  - seconds between expired-entry sweeps (default 120)
    CACHE_MAX_KEYS      - optional capacity of the in-memory cache

The short URL domain is read from `HOST`. Its built-in placeholder
('short.url') only exists so local runs work; every deployment must set it.

Functions:
    app_env() -> str
    app_name() -> str | None
    app_prefix() -> str | None
    project_root() -> Path
    config_file() -> Path
    load_config(lambda_name: str) -> dict
    short_url_domain() -> str
    cache_settings() -> dict

Example:
    >>> from linkshortener.utils.config import load_config
    >>> config = load_config('shorten_url')
    >>> config['redis']['host']
    'localhost'
"""

import os
import json
import logging
from pathlib import Path
from typing import Any

from linkshortener.constants import ENV, TTL, DEFAULT_SHORT_URL_DOMAIN
from linkshortener.exceptions import BadConfigurationError
from linkshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)

CACHE_BACKENDS = frozenset({'memory', 'redis'})


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Uses the PROJECT_ROOT environment variable when set.
    Falls back to the directory containing the package.
    """
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, Path(__file__).resolve().parents[2]))


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'linkshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'linkshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def config_file() -> Path:
    """Return the path of the JSON configuration document"""
    path = os.environ.get(ENV.App.CONFIG_FILE)
    if path:
        return Path(path)
    return project_root() / 'config' / f'{app_env()}.json'


def load_config(lambda_name: str) -> dict:
    """Load datastore configuration for a given Lambda

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: {<active backend>: <backend config for this lambda>}

    Raises:
        FileNotFoundError:
            If the configuration document does not exist.
        BadConfigurationError:
            If the document is not valid JSON or lacks the lambda's section.

    Example:
        >>> load_config('redirect_url')
        {'redis': {'host': 'localhost', 'port': 6379, 'db': 0}}
    """
    path = config_file()
    logger.debug('Loading configuration document.', extra={'path': str(path), 'lambdaName': lambda_name})

    with open(path, encoding='utf-8') as f:
        try:
            config = json.load(f)
        except json.JSONDecodeError as e:
            raise BadConfigurationError(f'Invalid JSON in configuration document {path}') from e

    try:
        backend = config['active_backend']
        data = {backend: config['configs'][lambda_name][backend]}
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"Configuration document {path} has no '{lambda_name}' section for the active backend") from e

    return data


def short_url_domain() -> str:
    """Return the domain used to render short URLs

    Reads `HOST`. The placeholder default is only meant for local runs, so a
    warning is logged whenever it is used.

    Example:
        >>> os.environ['HOST'] = 'https://sho.rt'
        >>> short_url_domain()
        'https://sho.rt'
    """
    domain = os.environ.get(ENV.App.HOST)
    if not domain:
        logger.warning(
            'HOST is not configured; rendering short URLs with the placeholder domain.',
            extra={'domain': DEFAULT_SHORT_URL_DOMAIN},
        )
        return DEFAULT_SHORT_URL_DOMAIN
    return domain


def _int_setting(name: str, default: int | None, minimum: int = 0) -> int | None:
    raw = os.environ.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise BadConfigurationError(f'{name} must be an integer (given value: {raw!r}).') from e
    if value < minimum:
        raise BadConfigurationError(f'{name} must be >= {minimum} (given value: {value}).')
    return value


def cache_settings() -> dict[str, Any]:
    """Return cache layer settings resolved from the environment

    Every deployed Lambda runs in its own containers, so invalidating a
    per-process cache would leave the other functions serving stale listings.
    The memory backend is therefore the default only for local runs, and is
    refused everywhere else.

    Returns:
        dict: {'backend': str, 'default_ttl': int, 'check_period': int, 'max_keys': int | None}

    Raises:
        BadConfigurationError:
            If any cache setting is malformed, or the memory backend is
            requested outside a local run.
    """
    local = running_locally()
    backend = os.environ.get(ENV.Cache.BACKEND) or ('memory' if local else 'redis')
    backend = backend.lower()
    if backend not in CACHE_BACKENDS:
        raise BadConfigurationError(f'{ENV.Cache.BACKEND} must be one of {sorted(CACHE_BACKENDS)} (given value: {backend!r}).')
    if backend == 'memory' and not local:
        raise BadConfigurationError(f'{ENV.Cache.BACKEND}=memory is only supported for local runs; deployed functions must share the redis cache.')

    return {
        'backend': backend,
        'default_ttl': _int_setting(ENV.Cache.DEFAULT_TTL, TTL.DEFAULT, minimum=1),
        'check_period': _int_setting(ENV.Cache.CHECK_PERIOD, TTL.CHECK_PERIOD),
        'max_keys': _int_setting(ENV.Cache.MAX_KEYS, None, minimum=1),
    }
