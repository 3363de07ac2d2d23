"""Utility functions for application configuration management.

Lambda functions read their configuration from **AWS AppConfig**. Each
environment (`APP_ENV`) has a dedicated AppConfig *Environment* within the
AppConfig *Application* identified by `APP_NAME`. The JSON document looks
like this:

    {
        "active_backend": "redis",
        "configs": {
            "shorten_url": {
                "redis": { "host": "...", "port": 6379, "db": 0 },
                "shortener": { "max_retries": 256, "default_ttl_days": 30 }
            },
            "redirect_url": {
                "redis": { ... }
            },
            "list_urls": {
                "redis": { ... }
            }
        }
    }

When running locally (SAM CLI, APP_ENV=local) the same per-lambda section is
read from YAML files instead:

    config/
    ├── shorten_url/
    │   └── local.yml
    ├── redirect_url/
    │   └── local.yml
    └── list_urls/
        └── local.yml

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), `'local'` by default.
    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.
    app_prefix() -> str | None
        Return the key prefix for DAOs, or None if `APP_NAME` is not set.
    project_root() -> Path
        Return the project root directory, using `PROJECT_ROOT` when available.
    load_config(lambda_name: str) -> dict
        Load the configuration section of a given Lambda.

Example:
    >>> from urlshortener.utils.config import load_config
    >>> config = load_config('shorten_url')
    >>> config['redis']['host']
    'localhost'
"""

import os
import json
import logging
import functools
from pathlib import Path
from collections.abc import Callable

import boto3
import yaml

from urlshortener.utils.helpers import require_environment
from urlshortener.utils.runtime import running_locally
from urlshortener.utils.constants import (
    APP_ENV_ENV,
    APP_NAME_ENV,
    PROJECT_ROOT_ENV,
    APPCONFIG_APP_ID_ENV,
    APPCONFIG_ENV_ID_ENV,
    APPCONFIG_PROFILE_ID_ENV,
)


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(APP_ENV_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'"""
    return os.environ.get(APP_NAME_ENV)


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Falls back to the repository root (two levels above this package).
    """
    return Path(os.environ.get(PROJECT_ROOT_ENV, Path(__file__).resolve().parents[2]))


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'urlshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'urlshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _extract_lambda_config(document: dict, lambda_name: str) -> dict:
    """Pick the active backend's (and the shortener's) section for one lambda"""
    backend = document['active_backend']
    lambda_config = document['configs'][lambda_name]
    data = {backend: lambda_config[backend]}
    if 'shortener' in lambda_config:
        data['shortener'] = lambda_config['shortener']
    return data


def _load_local_yaml_config(func: Callable[[str], dict]) -> Callable[[str], dict]:
    """Decorator: load configuration from config/<lambda>/<env>.yml when running locally

    Args:
        func (Callable[[str], dict]):
            load_config()

    Returns:
        Callable[[str], dict]:
            A compatible function which reads the local YAML file when running
            locally, and otherwise defers to AWS AppConfig.

    Raises:
        FileNotFoundError: If running locally and the YAML file doesn't exist.
    """

    @functools.wraps(func)
    def wrapper(lambda_name: str, *args, **kwargs) -> dict:
        if not running_locally():
            return func(lambda_name, *args, **kwargs)

        path = project_root() / 'config' / lambda_name / f'{app_env()}.yml'
        logger.debug('Trying to load local YAML config.', extra={'path': str(path), 'lambdaName': lambda_name})
        with open(path, 'r', encoding='utf-8') as f:
            document = yaml.safe_load(f)

        return _extract_lambda_config(document, lambda_name)

    return wrapper


@_load_local_yaml_config
@require_environment(APPCONFIG_APP_ID_ENV, APPCONFIG_ENV_ID_ENV, APPCONFIG_PROFILE_ID_ENV)
def load_config(lambda_name: str) -> dict:
    """Load configuration for a given Lambda from AWS AppConfig

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: {<active backend>: {...}, "shortener": {...}} for this lambda.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[APPCONFIG_APP_ID_ENV],
        EnvironmentIdentifier=os.environ[APPCONFIG_ENV_ID_ENV],
        ConfigurationProfileIdentifier=os.environ[APPCONFIG_PROFILE_ID_ENV],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    document = json.loads(response['Configuration'].read().decode('utf-8'))

    data = _extract_lambda_config(document, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return data
