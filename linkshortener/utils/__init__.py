from linkshortener.utils.config import app_env, app_name, project_root, app_prefix, load_config, short_url_domain, cache_settings
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.utils.shortener import encode_id, decode_shortcode, build_short_url
from linkshortener.utils.logging import initialize_logging


__all__ = [
    'encode_id',
    'decode_shortcode',
    'build_short_url',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'short_url_domain',
    'cache_settings',
    'guarantee_500_response',
    'initialize_logging',
]
