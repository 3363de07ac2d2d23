from urlshortener.utils.config import app_env, app_name, project_root, app_prefix, load_config
from urlshortener.utils.helpers import base_url, get_short_url, resolve_expiry, require_environment, guarantee_500_response
from urlshortener.utils.shortener import generate_shortcode, encode_base62
from urlshortener.utils.validators import validate_target_url, validate_custom_shortcode, parse_expiry
from urlshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'encode_base62',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'base_url',
    'get_short_url',
    'resolve_expiry',
    'require_environment',
    'guarantee_500_response',
    'validate_target_url',
    'validate_custom_shortcode',
    'parse_expiry',
    'initialize_logging',
]
